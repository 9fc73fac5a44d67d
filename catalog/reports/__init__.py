"""
Report builders for the catalog manager.

- Summary: one-row-per-product table exported as CSV with metadata
"""
