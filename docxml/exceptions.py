"""docxml 예외 정의"""

from typing import Optional


class DocxmlError(Exception):
    """docxml 기본 예외"""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ArchiveError(DocxmlError):
    """ZIP 아카이브에서 파일을 읽을 수 없을 때"""

    pass


class StructureError(DocxmlError):
    """문서 구조가 OOXML로 표현될 수 없을 때"""

    pass


class MissingAncestorError(StructureError):
    """필요한 상위 컴포넌트 없이 직렬화하려 할 때"""

    pass


class TableStructureError(StructureError):
    """표의 행/열 병합이 일관되지 않을 때"""

    pass


class UnknownComponentError(StructureError):
    """레지스트리에 없는 컴포넌트 이름"""

    pass


class UnhandledRelationshipError(StructureError):
    """처리할 클래스가 없는 관계 타입"""

    pass


class MissingReferenceError(DocxmlError):
    """존재하지 않는 식별자 참조 (주석, 관계, 번호 매기기)"""

    pass


class DuplicateIdentifierError(DocxmlError):
    """이미 사용 중인 식별자 (스타일, 책갈피, 번호 매기기)"""

    pass
