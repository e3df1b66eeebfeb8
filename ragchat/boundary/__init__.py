"""Boundary adapters: relational store, vector stores, embedding providers."""
