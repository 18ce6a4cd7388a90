"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Member, board and post services validate business rules, call repositories
and translate storage constraint violations into domain errors. Routers
own the transaction and commit after a successful service call.
"""
