"""
Assets module: tenant inventory ledger
"""
