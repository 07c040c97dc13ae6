"""
Requests module: employee asset requests and the approval workflow
"""
