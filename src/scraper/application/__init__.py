"""Crawl and enrichment use cases."""
