"""
Signing core: validation, service policy, signatures and envelope assembly.
"""
