"""
Pricebook data store service.
"""
