"""
api/blueprints/
Blueprints Flask da API do NetDash.
"""
