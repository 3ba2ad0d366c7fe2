"""파트 간 관계 (*.rels)

관계 대상은 패키지 루트 기준 전체 경로로 보관하고, 기록할 때 소유 파트의
디렉터리 기준 상대 경로로 바꾼다. 외부 대상(URL)은 그대로 기록한다.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, TypeVar, Union

from lxml import etree

from docxml.exceptions import MissingReferenceError, UnhandledRelationshipError
from docxml.wordml.base import NS
from docxml.wordml.identifiers import IdAllocator
from docxml.wordml.package.archive import Archive, normalize_location
from docxml.wordml.package.enums import (
    BINARY_RELATIONSHIP_TYPES,
    EXTERNAL_RELATIONSHIP_TYPES,
    ContentType,
    RelationshipType,
)
from docxml.wordml.package.files import PackagePart, XmlFile


logger = logging.getLogger(__name__)

P = TypeVar("P", bound=PackagePart)


@dataclass(frozen=True)
class RelationshipMeta:
    """관계 항목 하나"""
    id: str
    type: RelationshipType
    target: str
    is_external: bool = False
    is_binary: bool = False


def resolve_target(location: str, target: str) -> str:
    """관계 파일 기준 Target 을 패키지 경로로 변환"""
    if target.startswith("/"):
        return normalize_location(target)
    return posixpath.normpath(posixpath.join(posixpath.dirname(location), "..", target))


def relative_target(location: str, target: str) -> str:
    """패키지 경로를 관계 파일 기준 Target 으로 변환"""
    base = posixpath.dirname(posixpath.dirname(location)) or "."
    return posixpath.relpath(target, base)


class Relationships(XmlFile):
    """파트 하나가 소유한 관계 목록"""

    content_type = ContentType.RELATIONSHIPS.value

    def __init__(
        self,
        location: str,
        meta: Optional[List[RelationshipMeta]] = None,
        instances: Optional[Dict[str, PackagePart]] = None,
        allocator: Optional[IdAllocator] = None,
    ):
        super().__init__(location)
        self.allocator = allocator or IdAllocator()
        self._meta: List[RelationshipMeta] = list(meta or [])
        self._instances: Dict[str, PackagePart] = dict(instances or {})

    def __len__(self) -> int:
        return len(self._meta)

    @property
    def meta(self) -> List[RelationshipMeta]:
        return list(self._meta)

    # ============================================================
    # 조회
    # ============================================================

    def get_meta(self, rid: str) -> Optional[RelationshipMeta]:
        for meta in self._meta:
            if meta.id == rid:
                return meta
        return None

    def get_target(self, rid: str) -> str:
        meta = self.get_meta(rid)
        if meta is None:
            raise MissingReferenceError(
                f'Relationship "{rid}" does not exist',
                f"known relationships in {self.location}: " + ", ".join(m.id for m in self._meta),
            )
        return meta.target

    def get_instance(self, rid: str) -> Optional[PackagePart]:
        return self._instances.get(rid)

    def find(self, predicate: Callable[[RelationshipMeta], bool]) -> Optional[RelationshipMeta]:
        for meta in self._meta:
            if predicate(meta):
                return meta
        return None

    def find_instance(self, predicate: Callable[[RelationshipMeta], bool]) -> Optional[PackagePart]:
        """조건에 맞는 첫 관계의 파트 (없으면 None)"""
        for meta in self._meta:
            if predicate(meta) and meta.id in self._instances:
                return self._instances[meta.id]
        return None

    def filter_instances(self, predicate: Callable[[RelationshipMeta], bool]) -> List[PackagePart]:
        return [
            self._instances[meta.id]
            for meta in self._meta
            if predicate(meta) and meta.id in self._instances
        ]

    def has_type(self, rel_type: RelationshipType) -> bool:
        return any(meta.type == rel_type for meta in self._meta)

    # ============================================================
    # 추가
    # ============================================================

    def add(self, rel_type: RelationshipType, target: Union[PackagePart, str]) -> str:
        """관계 추가 후 ID 반환 (문자열 대상은 외부 URI)"""
        rel_type = RelationshipType(rel_type)
        rid = self.allocator.unique_id("rId", {meta.id for meta in self._meta})
        if isinstance(target, PackagePart):
            meta = RelationshipMeta(
                id=rid,
                type=rel_type,
                target=target.location,
                is_external=False,
                is_binary=rel_type in BINARY_RELATIONSHIP_TYPES,
            )
            self._instances[rid] = target
        else:
            meta = RelationshipMeta(
                id=rid,
                type=rel_type,
                target=target,
                is_external=rel_type in EXTERNAL_RELATIONSHIP_TYPES or "://" in target,
            )
        self._meta.append(meta)
        logger.debug("Added relationship %s (%s) -> %s", rid, rel_type.name, meta.target)
        return rid

    def ensure_relationship(self, rel_type: RelationshipType, factory: Callable[[], P]) -> P:
        """해당 타입의 기존 파트를 반환하거나 factory() 로 만들어 등록"""
        instance = self.find_instance(lambda meta: meta.type == rel_type)
        if instance is None:
            instance = factory()
            self.add(rel_type, instance)
        return instance

    # ============================================================
    # 직렬화
    # ============================================================

    def _is_live(self, meta: RelationshipMeta) -> bool:
        if meta.is_external:
            return True
        instance = self._instances.get(meta.id)
        return instance is not None and not instance.is_empty()

    def is_empty(self) -> bool:
        return not any(self._is_live(meta) for meta in self._meta)

    def get_related(self) -> List[PackagePart]:
        """자신과 비어 있지 않은 모든 대상 파트 (재귀, 위치 기준 중복 제거)"""
        related: List[PackagePart] = [self]
        seen = {self.location}
        for meta in self._meta:
            instance = self._instances.get(meta.id)
            if instance is None or instance.is_empty():
                continue
            for part in instance.get_related():
                if part.location not in seen:
                    seen.add(part.location)
                    related.append(part)
        return related

    def to_node(self) -> etree._Element:
        root = etree.Element(etree.QName(NS["rel"], "Relationships"), nsmap={None: NS["rel"]})
        for meta in self._meta:
            if not self._is_live(meta):
                continue
            rel = etree.SubElement(root, etree.QName(NS["rel"], "Relationship"))
            rel.set("Id", meta.id)
            rel.set("Type", meta.type.value)
            if meta.is_external:
                rel.set("Target", meta.target)
                rel.set("TargetMode", "External")
            else:
                rel.set("Target", relative_target(self.location, meta.target))
        return root

    @classmethod
    def from_archive(
        cls,
        archive: Archive,
        location: str,
        allocator: Optional[IdAllocator] = None,
    ) -> "Relationships":
        """관계 파일 파싱 후 대상 파트 로드"""
        from docxml.wordml.package.loader import load_part

        allocator = allocator or IdAllocator()
        meta: List[RelationshipMeta] = []
        instances: Dict[str, PackagePart] = {}
        for rel in archive.read_xml(location).findall("rel:Relationship", NS):
            raw_type = rel.get("Type", "")
            is_external = rel.get("TargetMode") == "External"
            target = rel.get("Target", "")
            try:
                rel_type = RelationshipType(raw_type)
            except ValueError:
                raise UnhandledRelationshipError(
                    f'Unhandled relationship type "{raw_type}"', f"{target} in {location}"
                ) from None
            entry = RelationshipMeta(
                id=rel.get("Id", ""),
                type=rel_type,
                target=target if is_external else resolve_target(location, target),
                is_external=is_external,
                is_binary=rel_type in BINARY_RELATIONSHIP_TYPES,
            )
            if not is_external:
                if not archive.has_file(entry.target):
                    logger.warning("Relationship %s in %s points to missing part %s", entry.id, location, entry.target)
                    continue
                instances[entry.id] = load_part(archive, rel_type, entry.target, allocator)
            meta.append(entry)
        logger.debug("Read %d relationships from %s", len(meta), location)
        return cls(location, meta, instances, allocator)
