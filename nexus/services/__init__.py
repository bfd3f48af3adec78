"""
Services Module - Business logic behind the HTTP surface.

- assistant_service: one user turn (classify, then resolve)
- intent_resolver: ordered handler chain
- intent_handlers: one handler per intent branch
- search_service: grounded search and video lookup
"""
