"""Discord Scraper Crawl Pipeline.

This package downloads the full message history of Discord channels into
a SQLite store.

Usage:
    python -m discord_scraper.ingest CHANNEL_ID [CHANNEL_ID ...]
    python -m discord_scraper.ingest --auth TOKEN --db-path ./data/messages.db 123
"""
