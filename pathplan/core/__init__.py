"""Configuration, logging, errors and connection handling"""
