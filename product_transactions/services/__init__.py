"""Services package: transaction search and monthly reporting."""
