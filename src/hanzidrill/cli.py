"""Command line interface for the Chinese study tool."""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .config import StudyConfig
from .generator import GenerationError, LengthClass, SentenceGenerator, grammar_hints
from .loader import load_vocabulary_sets
from .logger import setup_logger
from .pool import resolve_pool
from .sessions import GeneratorSession, OrderingSession
from .speech import default_speaker
from .store import JsonSelectionStore, toggle_selection
from .validator import validate
from .vocabulary import SET_IDS


def _load_config(args: argparse.Namespace) -> StudyConfig:
    config = StudyConfig.from_env()
    if args.data_dir is not None:
        config.data_dir = args.data_dir
    if args.selection_file is not None:
        config.selection_path = args.selection_file
    if args.log_level is not None:
        config.log_level = args.log_level.upper()
    if args.log_file is not None:
        config.log_file = args.log_file
    return config


def _selection_store(config: StudyConfig) -> JsonSelectionStore:
    return JsonSelectionStore(config.selection_path, default_set_id=config.default_set_id)


def _run_generate(args: argparse.Namespace, config: StudyConfig) -> int:
    sets = load_vocabulary_sets(config.data_dir)
    selected = args.sets if args.sets else _selection_store(config).get()
    pool = resolve_pool(selected, sets, config.default_set_id)
    generator = SentenceGenerator(
        rng=random.Random(args.seed) if args.seed is not None else None,
        aspect_probability=config.aspect_probability,
    )
    session = GeneratorSession(
        generator,
        pool,
        length=args.length,
        speaker=default_speaker() if args.speak else None,
    )
    for _ in range(args.count):
        sentence = session.regenerate()
        sys.stdout.write(sentence.text + "\n")
        if args.pinyin:
            sys.stdout.write(f"  {sentence.pinyin}\n")
        if args.english:
            sys.stdout.write(f"  {sentence.english}\n")
            for hint in grammar_hints(sentence):
                sys.stdout.write(f"  - {hint}\n")
        session.speak()
    return 0


def _run_check(args: argparse.Namespace) -> int:
    if len(args.answer) != len(args.expected):
        sys.stderr.write(
            f"error: answer has {len(args.answer)} tokens but expected has {len(args.expected)}\n"
        )
        return 1
    result = validate(args.expected, args.answer)
    if result.matched:
        sys.stdout.write("correct\n")
        return 0
    sys.stdout.write(f"first mismatch at position {result.first_mismatch_index}\n")
    for explanation in result.explanations:
        sys.stdout.write(f"- {explanation}\n")
    return 1


def _run_sets(args: argparse.Namespace, config: StudyConfig) -> int:
    store = _selection_store(config)
    requested = list(args.select or []) + ([args.toggle] if args.toggle else [])
    unknown = [set_id for set_id in requested if set_id not in SET_IDS]
    if unknown:
        sys.stderr.write(f"error: unknown vocabulary set {unknown[0]!r}\n")
        return 1
    if args.select is not None:
        store.set(args.select)
    if args.toggle:
        toggle_selection(store, args.toggle)

    sets = load_vocabulary_sets(config.data_dir)
    selected = store.get()
    for set_id in SET_IDS:
        mark = "x" if set_id in selected else " "
        sys.stdout.write(f"[{mark}] {set_id} ({len(sets.get(set_id, ()))})\n")
    return 0


def _drill(session: OrderingSession, stdin: TextIO, stdout: TextIO) -> int:
    stdout.write(f"English: {session.item.english_prompt}\n")
    stdout.write("Pick tiles by number; u = undo, r = reset, a = reveal, q = quit.\n")
    while True:
        stdout.write(f"Your sentence: {' '.join(session.picked) or '-'}\n")
        if session.finished:
            break
        tiles = "  ".join(f"{i + 1}:{tile}" for i, tile in enumerate(session.choices))
        stdout.write(f"Tiles: {tiles}\n> ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            return 1
        command = line.strip().lower()
        if command == "q":
            return 1
        if command == "u":
            session.undo()
        elif command == "r":
            session.reset()
        elif command == "a":
            session.reveal()
        elif command.isdigit() and 1 <= int(command) <= len(session.choices):
            session.pick(session.choices[int(command) - 1])
        else:
            stdout.write("Unrecognised input.\n")

    result = session.result
    if result.matched:
        stdout.write("Correct!\n")
    else:
        position = result.first_mismatch_index + 1
        stdout.write(f"Not quite. The first mistake is at position {position}.\n")
    for note in session.notes:
        stdout.write(f"- {note}\n")
    return 0 if result.matched else 1


def _import_web_run():
    from .web import run

    return run


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hanzidrill",
        description="Chinese flashcards, random sentences and sentence-building drills.",
    )
    parser.add_argument("--data-dir", type=Path, help="Directory containing the vocabulary set files.")
    parser.add_argument("--selection-file", type=Path, help="File storing the selected vocabulary sets.")
    parser.add_argument("--log-level", help="Logging level (default: INFO).")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file.")
    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser("generate", help="Generate random practice sentences.")
    gen_parser.add_argument(
        "-l",
        "--length",
        default=LengthClass.SHORT.value,
        help="Sentence length: short, regular or long (default: short).",
    )
    gen_parser.add_argument("-n", "--count", type=int, default=1, help="Number of sentences.")
    gen_parser.add_argument(
        "--sets",
        nargs="+",
        metavar="SET",
        help="Vocabulary sets to draw from instead of the saved selection.",
    )
    gen_parser.add_argument("--pinyin", action="store_true", help="Show pinyin.")
    gen_parser.add_argument("--english", action="store_true", help="Show the translation and grammar notes.")
    gen_parser.add_argument("--speak", action="store_true", help="Read each sentence aloud if a TTS program is available.")
    gen_parser.add_argument("--seed", type=int, help="Seed for reproducible output.")

    check_parser = subparsers.add_parser("check", help="Check a token order against the expected one.")
    check_parser.add_argument("--expected", nargs="+", required=True, help="Tokens in the correct order.")
    check_parser.add_argument("--answer", nargs="+", required=True, help="Tokens in the submitted order.")

    sets_parser = subparsers.add_parser("sets", help="Show or change the selected vocabulary sets.")
    sets_parser.add_argument("--select", nargs="*", metavar="SET", help="Replace the selection.")
    sets_parser.add_argument("--toggle", metavar="SET", help="Add or remove a single set.")

    drill_parser = subparsers.add_parser("drill", help="Sentence-building drill on the terminal.")
    drill_parser.add_argument("--seed", type=int, help="Seed for reproducible tile order.")

    web_parser = subparsers.add_parser(
        "web",
        help="Launch the web interface (requires Flask).",
    )
    web_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host interface to bind (default: 127.0.0.1).",
    )
    web_parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind (default: 8000).",
    )

    args = parser.parse_args(argv)
    try:
        config = _load_config(args)
        setup_logger(log_file=config.log_file, level=config.log_level)
    except ValueError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1

    if args.command == "generate":
        try:
            return _run_generate(args, config)
        except GenerationError as exc:
            sys.stderr.write(f"error: {exc}\n")
            return 1
    if args.command == "check":
        return _run_check(args)
    if args.command == "sets":
        return _run_sets(args, config)
    if args.command == "drill":
        rng = random.Random(args.seed) if args.seed is not None else None
        return _drill(OrderingSession(rng=rng, speaker=default_speaker()), sys.stdin, sys.stdout)
    if args.command == "web":
        try:
            run = _import_web_run()
        except ModuleNotFoundError as exc:  # pragma: no cover - depends on env
            if getattr(exc, "name", None) == "flask":
                sys.stderr.write(
                    "error: Flask is required for the web interface. Install it with `pip install flask`.\n"
                )
                return 1
            raise

        run(host=args.host, port=args.port, config=config)
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":  # pragma: no cover - convenience entry point
    sys.exit(main())
