"""Record collections and the marketplace operations built on them."""
