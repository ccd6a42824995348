from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

from prompt_assembly.config import Settings, assembler_config_from_settings
from prompt_assembly.core.errors import PromptAssemblyError
from prompt_assembly.domain.assembler import InvocationInput
from prompt_assembly.runtime.assembler import PromptAssembler


def _parse_json_or_text(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def parse_var(raw: str) -> tuple[str, Any]:
    """Parse ``name=value``; the value is JSON when it parses, else plain text."""
    name, sep, value = raw.partition('=')
    if not sep or not name:
        raise argparse.ArgumentTypeError(f'expected name=value, got {raw!r}')
    return name, _parse_json_or_text(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Assemble a prompt and print it with metadata.')
    parser.add_argument('--config', help='Assembler config JSON (templates, variables, contextSettings)')
    parser.add_argument('--store-dir', help='Template store root holding templates/<id>.md')
    parser.add_argument('--template', dest='template_id')
    parser.add_argument('--prompt')
    parser.add_argument('--var', action='append', type=parse_var, default=[], metavar='NAME=VALUE')
    parser.add_argument('--context', action='append', default=[], metavar='JSON')
    parser.add_argument('--text-only', action='store_true', help='Print only the rendered text')
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {'config_path': args.config, 'store_dir': args.store_dir}
    app_settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
    payload = InvocationInput(
        template_id=args.template_id,
        prompt=args.prompt,
        variables=dict(args.var) or None,
        context=[_parse_json_or_text(item) for item in args.context] or None,
    )

    try:
        assembler = PromptAssembler(assembler_config_from_settings(app_settings))
        result = assembler.invoke(payload)
    except PromptAssemblyError as exc:
        print(f'error: {exc}', file=sys.stderr)
        return 1

    if args.text_only:
        print(result.rendered_text)
    else:
        print(json.dumps(result.model_dump(by_alias=True, exclude_none=True), indent=2, ensure_ascii=False))
    return 0


if __name__ == '__main__':
    sys.exit(main())
