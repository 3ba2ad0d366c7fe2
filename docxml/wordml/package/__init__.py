"""OOXML 패키지 모듈

구조:
- archive.py: ZIP 컨테이너 읽기/쓰기
- enums.py: 콘텐츠 타입, 관계 타입, 기본 파트 위치
- files.py: 파트 기반 클래스
- relationships.py: 파트 간 관계 (*.rels)
- content_types.py: [Content_Types].xml
- document.py, styles.py, settings.py, numbering.py, comments.py,
  header_footer.py: 파트별 구현
- loader.py: 관계 타입 -> 파트 클래스
"""
