"""컴포넌트 기반 클래스와 이름 기반 레지스트리

표 -> 행 -> 셀 -> 표처럼 서로를 자식으로 갖는 컴포넌트는 모듈끼리 직접
import 할 수 없다. 각 클래스는 허용하는 자식을 이름으로 선언하고, 파싱할 때
레지스트리에서 이름으로 클래스를 찾는다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from lxml import etree

from docxml.exceptions import StructureError, UnknownComponentError

if TYPE_CHECKING:
    from docxml.wordml.package.archive import Archive
    from docxml.wordml.package.relationships import Relationships


logger = logging.getLogger(__name__)

# 가까운 조상부터 나열한 불변 튜플, 마지막은 파트 객체
Ancestry = Tuple[Any, ...]
ComponentNodes = Union[etree._Element, List[etree._Element]]
Child = Union["Component", str]

A = TypeVar("A")


class ComponentRegistry:
    """컴포넌트 이름 -> 클래스 등록부"""

    def __init__(self):
        self._classes: Dict[str, Type[Component]] = {}
        self._dispatch_cache: Dict[Tuple[str, ...], Dict[Any, List[Type[Component]]]] = {}

    def register(self, component: Type[C]) -> Type[C]:
        self._classes[component.__name__] = component
        self._dispatch_cache.clear()
        return component

    def get(self, name: str) -> Type[Component]:
        component = self._classes.get(name)
        if component is None:
            raise UnknownComponentError(f'Unknown component "{name}"')
        return component

    def names(self) -> List[str]:
        return sorted(self._classes)

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def dispatch_table(self, names: Sequence[str]) -> Dict[Any, List[Type[Component]]]:
        """허용 자식 이름 목록에 대한 태그 -> 후보 클래스 표"""
        key = tuple(names)
        table = self._dispatch_cache.get(key)
        if table is None:
            table = {}
            for name in key:
                component = self.get(name)
                table.setdefault(component.node_tag, []).append(component)
            self._dispatch_cache[key] = table
        return table

    def create_children(
        self,
        names: Sequence[str],
        nodes: Iterable[Union[etree._Element, str]],
        context: "ComponentContext",
    ) -> List[Child]:
        """XML 노드 목록을 자식 컴포넌트로 변환 (문자열은 그대로 유지)"""
        table = self.dispatch_table(names)
        children: List[Child] = []
        for node in nodes:
            if isinstance(node, str):
                children.append(node)
                continue
            for component in table.get(node.tag, ()):
                if component.matches_node(node):
                    children.append(component.from_node(node, context))
                    break
            else:
                logger.debug("Skipping element %s, not a legal child of %s", node.tag, names)
        return children


registry = ComponentRegistry()


def register_component(component: Type[C]) -> Type[C]:
    """기본 레지스트리에 등록하는 클래스 데코레이터"""
    return registry.register(component)


@dataclass
class ComponentContext:
    """from_node 파싱 문맥"""
    archive: Optional["Archive"] = None
    relationships: Optional["Relationships"] = None
    registry: ComponentRegistry = field(default_factory=lambda: registry)


def find_ancestor(ancestry: Ancestry, kind: Type[A]) -> Optional[A]:
    """가장 가까운 kind 타입 조상"""
    for ancestor in ancestry:
        if isinstance(ancestor, kind):
            return ancestor
    return None


def find_part_relationships(ancestry: Ancestry) -> Optional["Relationships"]:
    """ancestry 끝의 소유 파트가 가진 관계"""
    from docxml.wordml.package.files import XmlFileWithRelationships

    part = find_ancestor(ancestry, XmlFileWithRelationships)
    return part.relationships if part is not None else None


class PartRelationshipIds:
    """관계 파일 위치별 관계 ID

    같은 컴포넌트 인스턴스가 여러 파트(본문, 머리글 등)에 놓이면 파트마다
    다른 ID 를 갖는다. last 는 마지막으로 등록된 ID.
    """

    def __init__(self):
        self._ids: Dict[str, str] = {}
        self.last: Optional[str] = None

    def set(self, relationships: Optional["Relationships"], rid: str) -> None:
        if relationships is not None:
            self._ids[relationships.location] = rid
        self.last = rid

    def get(self, ancestry: Ancestry) -> Optional[str]:
        """ancestry 의 파트에 등록된 ID (파트가 없으면 last)"""
        relationships = find_part_relationships(ancestry)
        if relationships is None or not self._ids:
            return self.last
        rid = self._ids.get(relationships.location)
        if rid is None:
            raise StructureError(
                f"No relationship registered in {relationships.location}",
                "ensure_relationship() must run for every part the component is placed in",
            )
        return rid


class Component:
    """문서 트리 노드

    allowed_children 는 자식으로 허용하는 컴포넌트 이름, mixed 는 문자열 자식
    허용 여부다. 부모 참조는 갖지 않고 직렬화할 때 ancestry 로 전달받는다.
    """

    allowed_children: ClassVar[Tuple[str, ...]] = ()
    mixed: ClassVar[bool] = False
    node_tag: ClassVar[Optional[str]] = None
    props_class: ClassVar[Optional[type]] = None

    def __init__(self, props: Any = None, *children: Child):
        if props is None and self.props_class is not None:
            props = self.props_class()
        self.props = props
        self.children: List[Child] = list(children)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.props!r}, {len(self.children)} children)"

    @classmethod
    def matches_node(cls, node: etree._Element) -> bool:
        return cls.node_tag is not None and node.tag == cls.node_tag

    @classmethod
    def from_node(cls, node: etree._Element, context: Optional[ComponentContext] = None) -> "Component":
        raise NotImplementedError(f"{cls.__name__}.from_node() is not implemented")

    @classmethod
    def children_from_nodes(
        cls,
        nodes: Iterable[Union[etree._Element, str]],
        context: Optional[ComponentContext],
    ) -> List[Child]:
        context = context or ComponentContext()
        return context.registry.create_children(cls.allowed_children, nodes, context)

    def to_node(self, ancestry: Ancestry = ()) -> ComponentNodes:
        """기본 동작은 자식 노드를 펼친 fragment"""
        return self.children_to_nodes(ancestry)

    def children_to_nodes(
        self,
        ancestry: Ancestry,
        children: Optional[Sequence[Child]] = None,
    ) -> List[etree._Element]:
        """자식 노드 목록 (children 을 주면 그 부분만)"""
        anc = (self,) + tuple(ancestry)
        nodes: List[etree._Element] = []
        for child in self.children if children is None else children:
            if isinstance(child, str):
                raise StructureError(f"{type(self).__name__} cannot render text children")
            rendered = child.to_node(anc)
            if isinstance(rendered, list):
                nodes.extend(rendered)
            else:
                nodes.append(rendered)
        return nodes

    def ensure_relationship(self, relationships: "Relationships") -> None:
        """직렬화 전 관계 등록 훅"""
        return None

    def iter_components(self) -> Iterator["Component"]:
        """자신과 모든 하위 컴포넌트 (깊이 우선)"""
        yield self
        for child in self.children:
            if isinstance(child, Component):
                yield from child.iter_components()


C = TypeVar("C", bound=Component)
