"""
Assignments module: assets in employees' hands and their return
"""
