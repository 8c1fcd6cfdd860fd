"""
Catalog Domain - Entities, Aggregates, and Compatibility Rules.

This domain handles the TippingPoint TXE product catalog:
- Models (hardware chassis with throughput tiers)
- IO Modules (bypass and non-bypass network cards)
- Licenses (Inspection and ThreatDV)
- SMS appliances (management systems)
"""
