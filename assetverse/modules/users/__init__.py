"""
Users module: accounts for HR administrators and employees
"""
