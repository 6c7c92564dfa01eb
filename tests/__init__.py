"""Test suite for the Product Transactions API."""
