"""App package ingestion core"""
