"""
Configurator Domain - Configurations and Quotes.

This domain handles the configurations a user assembles in one session:
- Configuration (model, throughput tier, two module slots, licenses, SMS)
- Cascade rules (model -> throughput -> license auto-match)
- Quote flattening (configurations -> ordered quote lines)
"""
