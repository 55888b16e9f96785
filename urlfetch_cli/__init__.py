"""Terminal CLI for the URL fetcher."""
