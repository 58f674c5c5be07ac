"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services validate input, call repositories, and translate integrity errors
into the HTTP error taxonomy. Routers commit; services only flush.
"""
