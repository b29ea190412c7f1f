"""Player domain services: request parsing and shot extraction.

Pure helpers imported by the HTTP routes, keeping request/response concerns
separate from the rules for ids, paging and event scanning.
"""
