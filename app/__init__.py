"""
HTTP layer: upload endpoint returning the cleaned statement archive.
"""
