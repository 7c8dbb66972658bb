"""HTTP surface for the news reader."""
