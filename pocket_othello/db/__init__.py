"""Persisted settings record and its sqlite store"""
