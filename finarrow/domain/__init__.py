"""Domain rules: errors, column catalogue, cell validation, trends, sample data."""
