"""번호 매기기 파트 (word/numbering.xml)

추상 정의(w:abstractNum) 는 0 부터, 구체 번호(w:num) 는 1 부터 키를 발급하며
두 맵은 서로 독립적이다. 문단은 구체 번호 ID 를 w:numPr/w:numId 로 참조한다.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from lxml import etree

from docxml.exceptions import DuplicateIdentifierError, MissingReferenceError
from docxml.wordml.base import NS, child_val, new_element, sub_element, to_int, w_attr
from docxml.wordml.identifiers import NumberMap
from docxml.wordml.package.archive import Archive
from docxml.wordml.package.enums import ContentType, PartLocation
from docxml.wordml.package.files import XmlFile


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NumberingLevel:
    """w:lvl 하나 (format 예: decimal, bullet, lowerRoman)"""
    start: Optional[int] = None
    format: Optional[str] = None
    text: Optional[str] = None
    alignment: Optional[str] = None


@dataclass(frozen=True)
class AbstractNumbering:
    """추상 번호 정의 (type: hybridMultilevel, singleLevel, multilevel)"""
    id: Optional[int] = None
    type: Optional[str] = None
    levels: List[NumberingLevel] = field(default_factory=list)


@dataclass(frozen=True)
class ConcreteNumbering:
    id: int
    abstract: int


class Numbering(XmlFile):
    """번호 매기기 정의"""

    content_type = ContentType.NUMBERING.value

    def __init__(self, location: str = PartLocation.NUMBERING.value):
        super().__init__(location)
        self._abstracts: NumberMap[AbstractNumbering] = NumberMap(0)
        self._concretes: NumberMap[ConcreteNumbering] = NumberMap(1)

    def is_empty(self) -> bool:
        return not len(self._abstracts)

    def add_abstract(self, definition: AbstractNumbering) -> int:
        """추상 정의 추가 후 ID 반환"""
        abstract_id = definition.id
        if abstract_id is None:
            abstract_id = self._abstracts.get_next_available_key()
        if self._abstracts.has(abstract_id):
            raise DuplicateIdentifierError(f'There already is an abstract numbering "{abstract_id}"')
        self._abstracts.set(abstract_id, dataclasses.replace(definition, id=abstract_id))
        return abstract_id

    def add(self, abstract: Union[int, AbstractNumbering]) -> int:
        """추상 정의(ID 또는 새 정의)를 가리키는 구체 번호 추가 후 numId 반환"""
        if isinstance(abstract, AbstractNumbering):
            abstract = self.add_abstract(abstract)
        if not self._abstracts.has(abstract):
            raise MissingReferenceError(f'No abstract numbering at ID "{abstract}"')
        concrete_id = self._concretes.get_next_available_key()
        self._concretes.set(concrete_id, ConcreteNumbering(concrete_id, abstract))
        return concrete_id

    def get_abstract(self, abstract_id: int) -> Optional[AbstractNumbering]:
        return self._abstracts.get(abstract_id)

    def get(self, concrete_id: int) -> Optional[ConcreteNumbering]:
        return self._concretes.get(concrete_id)

    def has(self, concrete_id: int) -> bool:
        return self._concretes.has(concrete_id)

    @property
    def abstracts(self) -> List[AbstractNumbering]:
        return self._abstracts.array()

    @property
    def concretes(self) -> List[ConcreteNumbering]:
        return self._concretes.array()

    def to_node(self) -> etree._Element:
        root = new_element("w", "numbering")
        for abstract in self._abstracts.array():
            elem = sub_element(root, "w", "abstractNum", abstractNumId=str(abstract.id))
            if abstract.type:
                sub_element(elem, "w", "multiLevelType", val=abstract.type)
            for index, level in enumerate(abstract.levels):
                lvl = sub_element(elem, "w", "lvl", ilvl=str(index))
                if level.start is not None:
                    sub_element(lvl, "w", "start", val=str(level.start))
                if level.format:
                    sub_element(lvl, "w", "numFmt", val=level.format)
                if level.text is not None:
                    sub_element(lvl, "w", "lvlText", val=level.text)
                if level.alignment:
                    sub_element(lvl, "w", "lvlJc", val=level.alignment)
        for concrete in self._concretes.array():
            num = sub_element(root, "w", "num", numId=str(concrete.id))
            sub_element(num, "w", "abstractNumId", val=str(concrete.abstract))
        return root

    @classmethod
    def from_node(cls, root: etree._Element, location: str) -> "Numbering":
        numbering = cls(location)
        for elem in root.findall("w:abstractNum", NS):
            numbering.add_abstract(AbstractNumbering(
                id=to_int(w_attr(elem, "abstractNumId")),
                type=child_val(elem, "multiLevelType"),
                levels=[
                    NumberingLevel(
                        start=to_int(child_val(lvl, "start")),
                        format=child_val(lvl, "numFmt"),
                        text=child_val(lvl, "lvlText"),
                        alignment=child_val(lvl, "lvlJc"),
                    )
                    for lvl in elem.findall("w:lvl", NS)
                ],
            ))
        for elem in root.findall("w:num", NS):
            concrete_id = to_int(w_attr(elem, "numId"))
            abstract_id = to_int(child_val(elem, "abstractNumId"))
            if concrete_id is None or abstract_id is None:
                logger.debug("Skipping incomplete w:num in %s", location)
                continue
            numbering._concretes.set(concrete_id, ConcreteNumbering(concrete_id, abstract_id))
        return numbering

    @classmethod
    def from_archive(cls, archive: Archive, location: str) -> "Numbering":
        return cls.from_node(archive.read_xml(location), location)
