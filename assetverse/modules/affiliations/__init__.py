"""
Affiliations module: employee enrollment and HR capacity
"""
