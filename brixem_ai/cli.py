"""CLI entry point for brixem-ai.

Headless access to the chat client, document generation and provider setup.

Entry point:
    brixem-ai providers [--json]
    brixem-ai chat --message <text> [--provider P] [--model M] [--json]
    brixem-ai generate-document --type sow|estimate --name N --location L --description D
    brixem-ai setup --provider P --api-key KEY [--env-file .env.local]
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from brixem_ai.adapters.schema import ChatOptions, ChatTurn, ProviderKind
from brixem_ai.config import (
    API_KEY_ENV,
    API_KEY_URLS,
    DEFAULT_ENV_FILE,
    get_active_provider_name,
    load_providers,
    save_provider_config,
)
from brixem_ai.errors import AIClientError

logger = logging.getLogger(__name__)

PROVIDER_CHOICES = [k.value for k in ProviderKind]


# ─────────────────────────────────────────────────────────────────────
# ARGUMENT PARSING
# ─────────────────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="brixem-ai",
        description="Provider-agnostic AI tooling for Brixem projects.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command")

    # providers
    prov_p = sub.add_parser("providers", help="List supported AI providers")
    prov_p.add_argument(
        "--json", action="store_true", dest="json_output",
        help="Full JSON output (name, configured, models)",
    )

    # chat
    chat_p = sub.add_parser("chat", help="Run a single chat completion")
    chat_p.add_argument("--message", "-m", required=True, help="User message")
    chat_p.add_argument("--system", default=None, help="Optional system prompt")
    chat_p.add_argument("--provider", choices=PROVIDER_CHOICES, default=None,
                        help="Override AI_PROVIDER")
    chat_p.add_argument("--model", default=None, help="Tier (chat/fast/advanced) or model id")
    chat_p.add_argument("--max-tokens", type=int, default=None, help="Max output tokens")
    chat_p.add_argument("--temperature", type=float, default=None, help="Sampling temperature")
    chat_p.add_argument("--timeout", type=float, default=None, help="Request timeout (seconds)")
    chat_p.add_argument("--json", action="store_true", dest="json_output",
                        help="Print {content, usage} as JSON")

    # generate-document
    doc_p = sub.add_parser("generate-document", help="Generate a Scope of Work or Estimate")
    doc_p.add_argument("--type", required=True, choices=["sow", "estimate"], dest="doc_type")
    doc_p.add_argument("--name", required=True, help="Project name")
    doc_p.add_argument("--location", required=True, help="Project location")
    doc_p.add_argument("--description", required=True, help="Project description")
    doc_p.add_argument("--size-sqft", type=float, default=None, help="Project size in square feet")
    doc_p.add_argument("-o", "--output", default=None, help="Output file path (default: stdout)")

    # setup
    setup_p = sub.add_parser("setup", help="Save AI provider configuration to a dotenv file")
    setup_p.add_argument("--provider", required=True, choices=PROVIDER_CHOICES)
    setup_p.add_argument("--api-key", required=True, help="Provider API key")
    setup_p.add_argument("--env-file", default=DEFAULT_ENV_FILE,
                         help=f"Dotenv file to update (default: {DEFAULT_ENV_FILE})")

    return parser


# ─────────────────────────────────────────────────────────────────────
# COMMANDS
# ─────────────────────────────────────────────────────────────────────


def _cmd_providers(json_output: bool = False) -> int:
    """List providers. Returns exit code."""
    active = get_active_provider_name()
    providers = load_providers()

    if json_output:
        result = {
            "active": active,
            "providers": [
                {
                    "key": kind.value,
                    "name": d.name,
                    "configured": d.configured,
                    "api_key_env": API_KEY_ENV[kind],
                    "models": d.models.model_dump(),
                }
                for kind, d in providers.items()
            ],
        }
        json.dump(result, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0

    for kind, d in providers.items():
        marker = "*" if kind.value == active else " "
        status = "configured" if d.configured else f"set {API_KEY_ENV[kind]} ({API_KEY_URLS[kind]})"
        print(f"{marker} {kind.value:<12} {d.name:<18} {status}")
    return 0


async def _cmd_chat(
    message: str,
    system: Optional[str] = None,
    provider: Optional[str] = None,
    model: Optional[str] = None,
    max_tokens: Optional[int] = None,
    temperature: Optional[float] = None,
    timeout: Optional[float] = None,
    json_output: bool = False,
) -> int:
    """Run one completion. Returns exit code."""
    from brixem_ai.client import create_client

    turns = []
    if system:
        turns.append(ChatTurn(role="system", content=system))
    turns.append(ChatTurn(role="user", content=message))
    options = ChatOptions(model=model, max_tokens=max_tokens, temperature=temperature)

    try:
        client = create_client(provider, timeout=timeout)
        result = await client.chat_completion(turns, options)
    except AIClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if json_output:
        json.dump(result.model_dump(), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(result.content)
    return 0


async def _cmd_generate_document(
    doc_type: str,
    name: str,
    location: str,
    description: str,
    size_sqft: Optional[float] = None,
    output: Optional[str] = None,
) -> int:
    """Generate a document. Returns exit code."""
    from brixem_ai.documents import DocumentRequest, generate_document

    request = DocumentRequest(
        project_name=name,
        location=location,
        description=description,
        size_sqft=size_sqft,
        type=doc_type,
    )

    try:
        content = await generate_document(request)
    except AIClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if output:
        try:
            Path(output).write_text(content, encoding="utf-8")
        except OSError as e:
            print(f"Error: cannot write {output}: {e}", file=sys.stderr)
            return 1
        print(f"Document written to {output}", file=sys.stderr)
    else:
        sys.stdout.write(content)
        sys.stdout.write("\n")
    return 0


def _cmd_setup(provider: str, api_key: str, env_file: str = DEFAULT_ENV_FILE) -> int:
    """Persist provider choice. Returns exit code."""
    try:
        path = save_provider_config(provider, api_key, env_file)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: cannot write {env_file}: {e}", file=sys.stderr)
        return 1

    print(f"Configuration saved to {path}", file=sys.stderr)
    print(f"AI_PROVIDER={provider}")
    return 0


# ─────────────────────────────────────────────────────────────────────
# ENTRY POINT
# ─────────────────────────────────────────────────────────────────────


def main():
    parser = _build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(name)s %(message)s", stream=sys.stderr)

    # Load env (.env.local written by `setup` takes precedence over .env)
    from dotenv import load_dotenv
    load_dotenv(DEFAULT_ENV_FILE)
    load_dotenv()

    # Dispatch
    if args.command == "providers":
        code = _cmd_providers(json_output=args.json_output)
    elif args.command == "chat":
        code = asyncio.run(_cmd_chat(
            message=args.message,
            system=args.system,
            provider=args.provider,
            model=args.model,
            max_tokens=args.max_tokens,
            temperature=args.temperature,
            timeout=args.timeout,
            json_output=args.json_output,
        ))
    elif args.command == "generate-document":
        code = asyncio.run(_cmd_generate_document(
            doc_type=args.doc_type,
            name=args.name,
            location=args.location,
            description=args.description,
            size_sqft=args.size_sqft,
            output=args.output,
        ))
    elif args.command == "setup":
        code = _cmd_setup(
            provider=args.provider,
            api_key=args.api_key,
            env_file=args.env_file,
        )
    else:
        parser.print_help()
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
