"""
Command-line entry point.

    python -m medassist_ai --text "Deep cut on the palm" --image hand.jpg
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from .ai_service import FirstAidOrchestrator
from .config import AIConfig
from .errors import UNAVAILABLE_MESSAGE, AIServiceError
from .models import MedicalHistory
from .structured_logging import setup_logging

logger = logging.getLogger("medassist_ai")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="medassist_ai",
        description="Generate first aid guidance from a description, photos and a voice note.",
    )
    parser.add_argument("--text", default="", help="Description of the injury or situation")
    parser.add_argument("--image", action="append", default=[], metavar="PATH",
                        help="Photo of the injury (repeatable)")
    parser.add_argument("--audio", metavar="PATH", help="Recorded voice description")
    parser.add_argument("--history-json", metavar="PATH",
                        help="JSON file with allergies, medications, conditions, bloodType, notes")
    parser.add_argument("--log-json", action="store_true", help="Emit JSON log lines on stderr")
    return parser


def load_history(path: Optional[str]) -> Optional[MedicalHistory]:
    if not path:
        return None
    with open(path, encoding="utf-8") as f:
        return MedicalHistory.model_validate(json.load(f))


async def run_guidance(args: argparse.Namespace, history: Optional[MedicalHistory]):
    async with FirstAidOrchestrator(AIConfig.from_env()) as orchestrator:
        return await orchestrator.generate(
            images=args.image,
            text=args.text,
            audio_file_path=args.audio,
            medical_history=history,
        )


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.INFO, use_json=args.log_json)

    try:
        history = load_history(args.history_json)
    except (OSError, ValueError, ValidationError) as e:
        print(f"Could not read medical history: {e}", file=sys.stderr)
        return 1

    try:
        result = asyncio.run(run_guidance(args, history))
    except AIServiceError as e:
        logger.error(f"Guidance request failed: {e}")
        print(str(e) if e.api_unavailable else UNAVAILABLE_MESSAGE, file=sys.stderr)
        return 2

    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
