"""
Pricebook catalog front-end: store client, browsing logic and NiceGUI views.
"""
