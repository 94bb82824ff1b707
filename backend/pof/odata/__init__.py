"""
OData helpers: query rewriting, split filters, URI building.
"""
