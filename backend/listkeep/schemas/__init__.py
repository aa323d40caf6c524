"""Pydantic Schemas — validation of article payloads at the store boundary.

Invariants:
    - Schemas validate untrusted editor payloads before they reach the codec
    - Domain records from core/ are the only thing services pass around

Design Decisions:
    - Separate from core/list_types: schemas are input contracts, dataclasses are the domain
"""
