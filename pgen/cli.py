from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

from .config import GeneratorConfig, load_config
from .engine import run_generate, run_inspect
from .errors import PGUserError
from .io import read_template_source
from .jsonic import dumps as jdumps
from .logs import setup_logging
from .types import GUIDANCE_CHOICES, RunOptions, SelectionPolicy
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pgen",
        description=(
            "Handy tool for generating prompts from a random template. "
            "`a random {prompt|word}` picks one of the words between the braces; "
            "groups nest (`this {{large |}cake|{loud|tiny} boat}`) and may be weighted "
            "(`{ball:1|box:3}` yields `box` three times as often as `ball`)."
        ),
        add_help=True,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Общие аргументы для generate/inspect
    def add_source(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "prompt",
            nargs="?",
            help="source prompt to parse",
        )
        sp.add_argument(
            "-f", "--file",
            metavar="FILE|-",
            help="read the prompt from a file (or - for stdin) instead of the argument",
        )
        sp.add_argument(
            "--ignore-invalid-weight-literals",
            action="store_true",
            default=None,
            help="treat non-numeric ':weight' suffixes as plain text instead of failing",
        )

    sp_gen = sub.add_parser("generate", help="expand the prompt and save the results")
    add_source(sp_gen)
    sp_gen.add_argument("-n", "--num", type=int, help="number of prompts to generate (default: 1)")
    sp_gen.add_argument("-o", "--out", help="output file (default: prompts.txt)")
    sp_gen.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=None,
        help="print generated prompts to console",
    )
    sp_gen.add_argument(
        "-d", "--dry-run",
        action="store_true",
        default=None,
        help="don't save the generated prompts; not very useful without --verbose",
    )
    sp_gen.add_argument(
        "-g", "--choice-guidance",
        choices=GUIDANCE_CHOICES,
        help="pick alternatives deterministically instead of at random",
    )
    sp_gen.add_argument("--seed", type=int, help="seed for reproducible random choices")
    sp_gen.add_argument("--config", help="YAML file with defaults (default: ./pgen.yaml if present)")
    sp_gen.add_argument(
        "--json",
        action="store_true",
        help="print a JSON report with the generated prompts instead of plain lines",
    )

    sp_inspect = sub.add_parser("inspect", help="JSON report on template structure (no generation)")
    add_source(sp_inspect)

    return p


def _pick(cli_value: Any, cfg_value: Any, default: Any) -> Any:
    """CLI > pgen.yaml > встроенное значение."""
    if cli_value is not None:
        return cli_value
    if cfg_value is not None:
        return cfg_value
    return default


def _opts(ns: argparse.Namespace, cfg: GeneratorConfig) -> RunOptions:
    defaults = RunOptions()

    num = _pick(ns.num, cfg.num, defaults.num)
    if num < 0:
        raise ValueError(f"--num must be a non-negative integer, got {num}")

    guidance = SelectionPolicy.parse(ns.choice_guidance) if ns.choice_guidance else None
    policy = _pick(guidance, cfg.choice_guidance, defaults.policy)

    out = _pick(ns.out, cfg.out, None)

    return RunOptions(
        num=num,
        out=Path(out) if out is not None else defaults.out,
        verbose=bool(_pick(ns.verbose, cfg.verbose, defaults.verbose)),
        dry_run=bool(_pick(ns.dry_run, cfg.dry_run, defaults.dry_run)),
        policy=policy,
        lenient=bool(_pick(ns.ignore_invalid_weight_literals, cfg.ignore_invalid_weight_literals, defaults.lenient)),
        seed=_pick(ns.seed, cfg.seed, defaults.seed),
    )


def main(argv: Optional[list[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    setup_logging()

    try:
        if ns.cmd == "generate":
            cfg = load_config(Path.cwd(), Path(ns.config) if ns.config else None)
            options = _opts(ns, cfg)
            source = read_template_source(ns.prompt, ns.file)
            result = run_generate(source, options)
            if ns.json:
                sys.stdout.write(jdumps(result.model_dump(mode="json")) + "\n")
            elif options.verbose:
                for prompt in result.prompts:
                    sys.stdout.write(prompt + "\n")
            return 0

        if ns.cmd == "inspect":
            source = read_template_source(ns.prompt, ns.file)
            report = run_inspect(source, lenient=bool(ns.ignore_invalid_weight_literals))
            sys.stdout.write(jdumps(report.model_dump(mode="json")) + "\n")
            return 0

    except PGUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
