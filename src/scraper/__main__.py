from src.scraper.cli import app

# python -m src.scraper
if __name__ == "__main__":
    app()
