"""CLI to extract per-page text from a PDF with progress display."""
import argparse
import logging
import mimetypes
import sys
from pathlib import Path

from tqdm import tqdm

from asknote.errors import AskNoteError
from asknote.tools.pdf_extract import extract_document


def main():
    """Extract text from one PDF and write the document text JSON."""
    parser = argparse.ArgumentParser(description="Extract per-page text from a PDF")
    parser.add_argument("pdf", type=Path, help="Path to the PDF file")
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output JSON path (default: <pdf name>.json next to the PDF)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    if not args.pdf.is_file():
        print(f"Error: file not found: {args.pdf}")
        sys.exit(1)

    output_path = args.output or args.pdf.with_suffix(".json")

    pbar = tqdm(desc="Extracting pages", unit="page")
    stats = {"ok": 0, "empty": 0, "failed": 0}

    def progress_callback(result):
        """Update progress bar and per-page stats."""
        if result.ok:
            stats["ok"] += 1
        elif result.error:
            stats["failed"] += 1
        else:
            stats["empty"] += 1
        pbar.set_postfix_str(f"page {result.page_number}")
        pbar.update(1)

    try:
        document = extract_document(
            args.pdf.read_bytes(),
            mimetypes.guess_type(args.pdf.name)[0],
            progress_callback=progress_callback
        )
    except AskNoteError as e:
        pbar.close()
        print(f"\nError: {e}")
        sys.exit(1)
    pbar.close()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(document.model_dump_json(indent=2))

    print("\n=== Extraction Summary ===")
    print(f"Pages with text: {stats['ok']}")
    print(f"Empty pages:     {stats['empty']}")
    print(f"Failed pages:    {stats['failed']}")
    print(f"Characters:      {len(document.full_text)}")
    print(f"Saved to:        {output_path}")


if __name__ == "__main__":
    main()
