"""ring_scout.crawler: fetching, link extraction and the crawl worker pool."""
