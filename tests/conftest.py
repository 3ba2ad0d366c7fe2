"""공용 픽스처"""

import pytest
from lxml import etree

from docxml import Docx, IdAllocator
from docxml.wordml.base import NS


NS_DECLARATIONS = " ".join(
    f'xmlns:{prefix}="{NS[prefix]}"' for prefix in ("w", "r", "wp", "a", "pic", "a14", "asvg")
)


@pytest.fixture
def allocator():
    return IdAllocator(seed=1234)


@pytest.fixture
def docx(allocator):
    return Docx.from_nothing(allocator)


@pytest.fixture
def parse_xml():
    """네임스페이스 선언을 붙여 XML 조각을 파싱하고 첫 요소 반환"""

    def _parse(fragment: str) -> etree._Element:
        wrapper = etree.fromstring(f"<wrapper {NS_DECLARATIONS}>{fragment}</wrapper>")
        return wrapper[0]

    return _parse


@pytest.fixture
def reopen():
    """ZIP 바이트로 저장 후 다시 읽은 Docx"""

    def _reopen(docx: Docx) -> Docx:
        return Docx.from_archive(docx.to_bytes(), IdAllocator(seed=99))

    return _reopen


@pytest.fixture
def xpath():
    def _xpath(node: etree._Element, expression: str):
        return node.xpath(expression, namespaces=NS)

    return _xpath
