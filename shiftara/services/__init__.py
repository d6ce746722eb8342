"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services call repositories for DB operations and the pure scheduling core
(``shiftara.scheduling``) for roster computation.
"""
