"""docxml CLI"""

import argparse
import logging
import sys
from pathlib import Path

from docxml import Docx
from docxml.exceptions import DocxmlError
from docxml.wordml.components import Paragraph, Section, Table, Text
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.content_types import ContentTypes


def _inspect(args) -> None:
    archive = Archive.from_file(args.input)
    content_types = ContentTypes.from_archive(archive)
    for location in sorted(archive.files()):
        print(f"{location}\t{content_types.get(location) or '-'}")

    docx = Docx.from_archive(archive)
    document = docx.document
    if document is None:
        print("No main document")
        return
    components = list(document.iter_components())
    print(
        f"sections: {sum(isinstance(c, Section) for c in components)}, "
        f"paragraphs: {sum(isinstance(c, Paragraph) for c in components)}, "
        f"tables: {sum(isinstance(c, Table) for c in components)}"
    )


def _roundtrip(args) -> None:
    output_path = Path(args.output)
    Docx.from_archive(args.input).to_file(output_path)
    print(f"Written: {output_path}")


def _hello(args) -> None:
    output_path = Docx.from_components([Paragraph(None, Text(None, args.text))]).to_file(args.output)
    print(f"Written: {output_path}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="DOCX 패키지 검사 및 변환",
        prog="docxml",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="디버그 로그 출력")
    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser("inspect", help="파트 목록과 본문 요약 출력")
    inspect_parser.add_argument("input", help="입력 DOCX 파일")
    inspect_parser.set_defaults(handler=_inspect)

    roundtrip_parser = subparsers.add_parser("roundtrip", help="읽은 뒤 다시 저장")
    roundtrip_parser.add_argument("input", help="입력 DOCX 파일")
    roundtrip_parser.add_argument("-o", "--output", required=True, help="출력 DOCX 파일")
    roundtrip_parser.set_defaults(handler=_roundtrip)

    hello_parser = subparsers.add_parser("hello", help="문단 하나짜리 문서 생성")
    hello_parser.add_argument("output", help="출력 DOCX 파일")
    hello_parser.add_argument("--text", default="Hello world", help="문단 내용")
    hello_parser.set_defaults(handler=_hello)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if hasattr(args, "input") and not Path(args.input).exists():
        print(f"Error: {args.input} not found", file=sys.stderr)
        sys.exit(1)

    try:
        args.handler(args)
    except DocxmlError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
