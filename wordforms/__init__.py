"""Collins word-forms scraper."""
