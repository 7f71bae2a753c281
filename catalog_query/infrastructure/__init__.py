"""Infrastructure layer - configuration, logging and the product data source."""
