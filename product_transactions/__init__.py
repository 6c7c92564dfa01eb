"""Product Transactions API: seed, search and report on product sale records."""
