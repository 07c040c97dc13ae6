"""
Payments module: package catalogue and capacity upgrades
"""
