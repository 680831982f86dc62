"""Per-family scrapers built on the crawler and the enrichment pipeline."""

from src.scraper.application.workflows.devil_fruits import DevilFruitScraper
from src.scraper.application.workflows.pirates import PirateScraper
from src.scraper.application.workflows.ships import ShipScraper

__all__ = ["DevilFruitScraper", "PirateScraper", "ShipScraper"]
