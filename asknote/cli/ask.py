"""CLI to ask questions about a PDF, one-shot or interactively."""
import argparse
import logging
import mimetypes
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown

from asknote.config import load_settings
from asknote.errors import AskNoteError
from asknote.tools.answer import AnswerSynthesizer
from asknote.tools.session import DocumentSession


console = Console()

EXIT_COMMANDS = {"exit", "quit", ":q"}


def main():
    load_dotenv()
    parser = argparse.ArgumentParser(
        description="Ask natural-language questions about a PDF"
    )
    parser.add_argument("pdf", type=Path, help="Path to the PDF file")
    parser.add_argument(
        "-q", "--question",
        action="append",
        default=[],
        help="Question to ask (repeatable). Starts an interactive prompt if omitted."
    )
    parser.add_argument(
        "--tone-routing",
        action="store_true",
        help="Reply to greetings/thanks/small talk with canned answers"
    )
    parser.add_argument(
        "--transcript",
        type=Path,
        help="Write the chat transcript to this file on exit"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (shows prompts and model output, very verbose)"
    )
    args = parser.parse_args()

    # Configure logging
    if args.debug:
        log_level = logging.DEBUG
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    elif args.verbose:
        log_level = logging.INFO
        log_format = "%(asctime)s - %(levelname)s - %(message)s"
    else:
        log_level = logging.WARNING
        log_format = "%(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    settings = load_settings()
    if args.tone_routing:
        settings = settings.model_copy(update={"tone_routing": True})
    if not settings.google_api_key:
        console.print("[yellow]⚠ GOOGLE_API_KEY is not set; answers will fail.[/yellow]")

    session = DocumentSession(AnswerSynthesizer.from_settings(settings))

    if not args.pdf.is_file():
        console.print(f"[red]✗ File not found: {args.pdf}[/red]")
        sys.exit(1)

    try:
        with console.status(f"Processing [yellow]{args.pdf.name}[/yellow]..."):
            document = session.load_document(
                args.pdf.read_bytes(),
                mimetypes.guess_type(args.pdf.name)[0],
                filename=args.pdf.name
            )
    except AskNoteError as e:
        console.print(f"[red]✗ Failed to process PDF: {e}[/red]")
        sys.exit(1)

    console.print(
        f"✓ [green]Loaded[/green] {args.pdf.name}: "
        f"{len(document.pages)} pages with text, {len(document.full_text)} chars"
    )

    if args.question:
        for question in args.question:
            _ask(session, question)
    else:
        _interactive(session)

    if args.transcript:
        args.transcript.write_text(session.export_transcript())
        console.print(f"Transcript saved to {args.transcript}")


def _ask(session: DocumentSession, question: str) -> None:
    console.print(f"\n[bold cyan]You:[/bold cyan] {question}")
    with console.status("Thinking..."):
        answer = session.ask(question)
    console.print(Markdown(answer))


def _interactive(session: DocumentSession) -> None:
    suggestions = session.suggested_questions()
    if suggestions:
        console.print("\n[bold]Suggested questions:[/bold]")
        for i, question in enumerate(suggestions, 1):
            console.print(f"  {i}. {question}")
    console.print("\nType a question, a suggestion number, or 'exit' to quit.")

    while True:
        try:
            text = console.input("\n[bold cyan]> [/bold cyan]").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not text:
            continue
        if text.lower() in EXIT_COMMANDS:
            break
        if text.isdigit() and 1 <= int(text) <= len(suggestions):
            text = suggestions[int(text) - 1]
        _ask(session, text)


if __name__ == "__main__":
    main()
