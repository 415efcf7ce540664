"""Activation Management System package.

Feature modules (attendance, reports, campaigns, users, ...) sit behind a thin
Flask controller layer; services and repositories talk to a document store.
"""
