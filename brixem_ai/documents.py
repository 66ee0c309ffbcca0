"""
Scope-of-Work and Estimate generation.

Documents are produced by the active chat provider. When no provider is
configured at all, a deterministic markdown template is returned instead so
the document flow still works in development. Provider failures
(HTTP errors, malformed responses) are not masked.
"""

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from brixem_ai.adapters.schema import ChatTurn
from brixem_ai.client import AIClient, create_client
from brixem_ai.errors import ConfigurationError

logger = logging.getLogger(__name__)


class DocumentType(str, Enum):
    SOW = "sow"
    ESTIMATE = "estimate"

    @property
    def label(self) -> str:
        return "Scope of Work" if self is DocumentType.SOW else "Estimate"


class DocumentRequest(BaseModel):
    project_name: str
    location: str
    description: str
    size_sqft: Optional[float] = None
    type: DocumentType


SYSTEM_PROMPT = """You are Brixem's construction planning assistant. Generate professional, structured construction documents in clear markdown format.

For Scope of Work (SOW): Include detailed work descriptions, materials, quality standards, and exclusions.
For Estimates: Provide high-level cost ranges for materials and labor, with assumptions clearly stated.

Use proper markdown formatting with headings, bullet points, tables, and clear sections."""

SOW_REQUIREMENTS = """- Detailed scope of work with clear deliverables
- Materials and quality specifications
- Work phases and timeline
- Exclusions and assumptions
- Quality standards and inspections"""

ESTIMATE_REQUIREMENTS = """- High-level cost estimate with ranges
- Materials cost breakdown
- Labor cost estimates
- Timeline and phases
- Assumptions and exclusions
- Risk factors and contingencies"""


def _format_size(size_sqft: Optional[float]) -> str:
    if size_sqft is None:
        return ""
    return f"{size_sqft:g}"


def build_document_prompts(request: DocumentRequest) -> tuple[str, str]:
    """Return (system_prompt, user_prompt) for a document request."""
    details = [
        f"- Name: {request.project_name}",
        f"- Location: {request.location}",
    ]
    if request.size_sqft is not None:
        details.append(f"- Size: {_format_size(request.size_sqft)} square feet")
    details.append(f"- Description: {request.description}")

    requirements = SOW_REQUIREMENTS if request.type is DocumentType.SOW else ESTIMATE_REQUIREMENTS

    label = request.type.label
    article = "an" if label[0] in "AEIOU" else "a"
    user_prompt = (
        f"Generate {article} {label} for the following project:\n\n"
        "**Project Details:**\n"
        + "\n".join(details)
        + "\n\n**Requirements:**\n"
        + requirements
        + "\n\nFormat the response in clean markdown with proper headings, "
        "bullet points, and tables where appropriate."
    )
    return SYSTEM_PROMPT, user_prompt


async def generate_document(
    request: DocumentRequest,
    client: Optional[AIClient] = None,
) -> str:
    """
    Generate a markdown document for the request.

    Args:
        request: Project details and document type
        client: Injected AIClient. When omitted, one is created from the
            environment; if that fails with ConfigurationError the template
            document is returned.

    Raises:
        UpstreamError / ProviderRequestError / ResponseShapeError from the provider
    """
    if client is None:
        try:
            client = create_client()
        except ConfigurationError as e:
            logger.warning("No AI provider configured (%s); using template document", e)
            return render_template_document(request)

    system_prompt, user_prompt = build_document_prompts(request)
    result = await client.chat_completion([
        ChatTurn(role="system", content=system_prompt),
        ChatTurn(role="user", content=user_prompt),
    ])
    return result.content


# ─────────────────────────────────────────────────────────────────────
# TEMPLATE DOCUMENTS
# ─────────────────────────────────────────────────────────────────────

_DISCLAIMER_SOW = (
    "*This Scope of Work is generated by Brixem AI and should be reviewed by "
    "qualified construction professionals before proceeding with the project.*"
)

_DISCLAIMER_ESTIMATE = (
    "*This estimate is generated by Brixem AI and should be reviewed by qualified "
    "construction professionals. Actual costs may vary based on specific project "
    "requirements and market conditions.*"
)

_SOW_BODY = """## Scope of Work

### 1. Site Preparation
- Site survey and measurements
- Existing condition assessment
- Permit acquisition and coordination
- Site safety setup and protection

### 2. Demolition and Removal
- Removal of existing fixtures and materials
- Structural assessment and reinforcement if needed
- Debris removal and site cleanup

### 3. Construction Work
- Foundation and structural work (if applicable)
- Framing and structural modifications
- Electrical and plumbing rough-in
- HVAC system installation/upgrades
- Insulation and vapor barrier installation

### 4. Finishing Work
- Interior wall and ceiling finishes
- Flooring installation
- Cabinetry and millwork
- Fixture and appliance installation
- Paint and final finishes

### 5. Quality Assurance
- Progress inspections at key milestones
- Final walkthrough and punch list
- Quality testing and verification

## Materials and Specifications
- All materials to meet local building codes
- Premium grade materials for visible surfaces
- Energy-efficient components where applicable

## Timeline
- **Phase 1 (Weeks 1-2):** Site preparation and permits
- **Phase 2 (Weeks 3-6):** Structural and rough-in work
- **Phase 3 (Weeks 7-10):** Finishing work
- **Phase 4 (Week 11):** Final inspection and cleanup

## Exclusions
- Furniture and personal belongings
- Landscaping and exterior work (unless specified)
- Permits and fees (responsibility of owner)
- Temporary accommodations during construction

## Assumptions
- Access to utilities and services
- Standard working hours (8 AM - 5 PM, Monday-Friday)
- Weather conditions permitting outdoor work
- Owner availability for decisions and approvals"""

_ESTIMATE_BODY = """## Cost Breakdown

### Materials
| Category | Estimated Cost | Notes |
|----------|----------------|-------|
| Structural Materials | $15,000 - $25,000 | Framing, foundation, structural components |
| Electrical | $8,000 - $15,000 | Wiring, panels, fixtures, and appliances |
| Plumbing | $6,000 - $12,000 | Pipes, fixtures, and connections |
| HVAC | $5,000 - $10,000 | Heating, ventilation, and air conditioning |
| Finishes | $12,000 - $20,000 | Paint, flooring, cabinets, and trim |
| **Total Materials** | **$46,000 - $82,000** | |

### Labor
| Category | Estimated Hours | Rate | Estimated Cost |
|----------|-----------------|------|----------------|
| General Contractor | 80-120 | $75-100/hr | $6,000 - $12,000 |
| Electrician | 40-60 | $65-85/hr | $2,600 - $5,100 |
| Plumber | 30-45 | $70-90/hr | $2,100 - $4,050 |
| HVAC Technician | 25-35 | $70-90/hr | $1,750 - $3,150 |
| Carpenters | 60-90 | $45-65/hr | $2,700 - $5,850 |
| Painters | 20-30 | $35-50/hr | $700 - $1,500 |
| **Total Labor** | **255-380** | | **$15,850 - $31,650** |

### Additional Costs
- **Permits and Fees:** $2,000 - $5,000
- **Equipment Rental:** $1,500 - $3,000
- **Waste Removal:** $800 - $1,500
- **Contingency (10%):** $6,500 - $12,200

## Total Project Estimate
**Range:** $72,650 - $145,950
**Recommended Budget:** $110,000

## Timeline Estimate
- **Total Duration:** 10-12 weeks
- **Start Date:** TBD based on permit approval
- **Completion:** TBD based on start date

## Assumptions and Notes
- Costs based on current market rates in {location}
- Estimates assume standard construction methods
- Prices may vary based on material choices and finishes
- Additional costs may apply for:
  - Design changes during construction
  - Unforeseen structural issues
  - Premium materials or finishes
  - Expedited timeline

## Risk Factors
- **Material Price Fluctuations:** ±5-10% due to market conditions
- **Weather Delays:** Potential for 1-2 week delays
- **Permit Processing:** Timeline dependent on local authorities
- **Supply Chain Issues:** May affect material availability

## Recommendations
1. **Budget Planning:** Plan for the upper end of the estimate range
2. **Timeline:** Allow 2-3 weeks buffer for unexpected delays
3. **Materials:** Lock in material prices early when possible
4. **Insurance:** Ensure adequate coverage during construction"""


def render_template_document(request: DocumentRequest) -> str:
    """Deterministic markdown document used when no provider is configured."""
    is_sow = request.type is DocumentType.SOW
    heading = "Scope of Work" if is_sow else "Cost Estimate"
    overview = "Project Overview" if is_sow else "Project Summary"

    lines = [
        f"# {heading} - {request.project_name}",
        "",
        f"## {overview}",
        f"**Project Name:** {request.project_name}  ",
        f"**Location:** {request.location}  ",
    ]
    if request.size_sqft is not None:
        lines.append(f"**Size:** {_format_size(request.size_sqft)} square feet  ")
    lines.append(f"**Description:** {request.description}")
    lines.append("")

    if is_sow:
        lines.append(_SOW_BODY)
    else:
        lines.append(_ESTIMATE_BODY.replace("{location}", request.location))

    lines.extend(["", "---", _DISCLAIMER_SOW if is_sow else _DISCLAIMER_ESTIMATE])
    return "\n".join(lines)
