"""
Anki Form Creator: command-line entry point
-------------------------------------------

Sends one note using the saved settings, without the GUI.
"""

import argparse
import asyncio
import sys

from ankiform.models import FormState, MediaFile
from ankiform.services import AnkiConnectClient, NoteFormService


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send one note to Anki via AnkiConnect.")
    parser.add_argument("word", help="Target word")
    parser.add_argument("--definition", default="")
    parser.add_argument("--sentence", default="")
    parser.add_argument("--translation", default="")
    parser.add_argument("--examples", default="")
    parser.add_argument("--notes", default="")
    parser.add_argument("--sentence-audio", help="Path to the sentence audio")
    parser.add_argument("--word-audio", help="Path to the word audio")
    parser.add_argument("--image", action="append", default=[], help="Image path (repeatable)")
    return parser.parse_args(argv)


async def main(argv=None) -> bool:
    """Main entry point."""
    args = parse_args(argv)
    form = FormState(
        target_word=args.word,
        definition=args.definition,
        sentence=args.sentence,
        sentence_translation=args.translation,
        example_sentences=args.examples,
        notes=args.notes,
        sentence_audio=MediaFile.from_path(args.sentence_audio) if args.sentence_audio else None,
        word_audio=MediaFile.from_path(args.word_audio) if args.word_audio else None,
        images=[MediaFile.from_path(p) for p in args.image],
    )

    async with AnkiConnectClient() as client:
        service = NoteFormService(client)
        service.form = form
        outcome = await service.submit()

    print(outcome.message)
    return outcome.success


def cli() -> None:
    try:
        success = asyncio.run(main())
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n[!] Aborted by user.")
        sys.exit(1)


if __name__ == "__main__":
    cli()
