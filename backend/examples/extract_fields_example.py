#!/usr/bin/env python3
"""
PDF Field Extractor - Example Usage
===================================

This script demonstrates how to extract fillable form fields from a PDF and
infer a caption for each field from the document's text.

Usage:
    python examples/extract_fields_example.py path/to/form.pdf

Requirements:
    - pdftk installed and on PATH
"""

import sys
import json
import argparse
import logging
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.services.errors import FieldExtractionError
from app.services.field_labels import FieldExtractionPipeline, LABEL_PATTERNS

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def process_pdf(pdf_path: str, output_path: str = None, output_format: str = 'json'):
    """
    Extract and label the fields of a PDF.

    Args:
        pdf_path: Path to the PDF file
        output_path: Optional path to save the output
        output_format: 'json' for the clean projection, 'text' for the report
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        logger.error(f"File not found: {pdf_path}")
        return None

    pipeline = FieldExtractionPipeline()

    try:
        result = pipeline.process_pdf(str(pdf_path))
    except FieldExtractionError as e:
        logger.error(str(e))
        return None

    stats = result.statistics

    # Print summary
    print("\n" + "=" * 60)
    print("PDF FIELD EXTRACTION RESULTS")
    print("=" * 60)
    print(f"\nFile: {result.filename} ({result.file_size_kb} KB)")
    print(f"Pages: {result.text_content.pages}")
    print(f"Total Fields: {result.total_fields}")
    if result.text_extraction_error:
        print(f"Text extraction failed, labels unavailable: {result.text_extraction_error}")

    print("\n" + "-" * 40)
    print("FIELDS")
    print("-" * 40)

    for field in result.fields:
        conf_indicator = "✓" if field.label_confidence >= 0.7 else "?" if field.label else "✗"
        label = field.label or '-'
        print(f"  {conf_indicator} [{(field.type or 'Unknown'):8}] {field.name}")
        print(f"    └─ Label: \"{label[:50]}{'...' if len(label) > 50 else ''}\" "
              f"(conf: {field.label_confidence:.2f})")

    print("\n" + "-" * 40)
    print("STATISTICS")
    print("-" * 40)

    print("\nField Type Distribution:")
    for ftype, count in stats['by_type'].items():
        if count:
            print(f"  {ftype}: {count}")

    print("\nFields by Part:")
    for part, count in stats['by_part'].items():
        print(f"  {part}: {count}")

    if output_path:
        output_path = Path(output_path)

        if output_format == 'text':
            output_path.write_text(result.text_output, encoding='utf-8')
        else:
            with open(output_path, 'w') as f:
                json.dump(result.to_clean_json(), f, indent=2)

        logger.info(f"Output saved to: {output_path}")

    return result


def show_patterns():
    """Print the field-name patterns used when no page text matches."""
    print("\n" + "=" * 60)
    print("FIELD NAME LABEL PATTERNS")
    print("=" * 60)
    print(f"\nTotal Patterns: {len(LABEL_PATTERNS)} (first match wins)\n")
    for key, label in LABEL_PATTERNS:
        print(f"  {key:16} -> {label}")


def main():
    parser = argparse.ArgumentParser(
        description='PDF Form Field Extractor',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Extract fields and print results
    python extract_fields_example.py form.pdf

    # Save the clean JSON projection
    python extract_fields_example.py form.pdf -o fields.json

    # Save the text report
    python extract_fields_example.py form.pdf -o fields.txt --format text

    # Show the field-name label patterns
    python extract_fields_example.py --patterns
        """
    )

    parser.add_argument(
        'pdf_path',
        nargs='?',
        help='Path to PDF file to process'
    )

    parser.add_argument(
        '-o', '--output',
        help='Path to save output'
    )

    parser.add_argument(
        '--format',
        choices=['json', 'text'],
        default='json',
        help='Output format for --output (default: json)'
    )

    parser.add_argument(
        '--patterns',
        action='store_true',
        help='Show the field-name label patterns and exit'
    )

    args = parser.parse_args()

    if args.patterns:
        show_patterns()
        return

    if not args.pdf_path:
        parser.print_help()
        print("\nError: Please provide a PDF path or use --patterns")
        sys.exit(1)

    if process_pdf(args.pdf_path, args.output, args.format) is None:
        sys.exit(1)


if __name__ == '__main__':
    main()
