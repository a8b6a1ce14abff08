"""
internalloggin/
Logging interno do NetDash (console + arquivo rotativo por módulo).
"""
