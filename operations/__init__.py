"""
Port operations domain apps: organizations, ports, terminals and contracts.
"""
