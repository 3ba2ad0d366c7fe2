"""CLI 명령"""

import pytest

from docxml import Docx
from docxml.cli import main


def test_hello_then_inspect(tmp_path, capsys):
    output = tmp_path / "hello.docx"
    main(["hello", str(output), "--text", "Hi there"])
    assert output.exists()
    assert "Written:" in capsys.readouterr().out

    main(["inspect", str(output)])
    out = capsys.readouterr().out
    assert "word/document.xml\tapplication/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml" in out
    assert "sections: 0, paragraphs: 1, tables: 0" in out


def test_roundtrip(tmp_path):
    source = tmp_path / "in.docx"
    target = tmp_path / "out.docx"
    main(["hello", str(source)])
    main(["roundtrip", str(source), "-o", str(target)])

    paragraph = Docx.from_archive(target).document.children[0]
    assert paragraph.children[0].children == ["Hello world"]


def test_missing_input(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["inspect", str(tmp_path / "nope.docx")])
    assert exc.value.code == 1
    assert "not found" in capsys.readouterr().err


def test_invalid_archive(tmp_path, capsys):
    broken = tmp_path / "broken.docx"
    broken.write_bytes(b"plain text")
    with pytest.raises(SystemExit) as exc:
        main(["roundtrip", str(broken), "-o", str(tmp_path / "out.docx")])
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("Error: Not a valid ZIP archive")
