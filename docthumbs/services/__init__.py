"""
Services module for the thumbnail pipeline.

Available Services:
- logger: loguru-backed service loggers
- thumbnail_pipeline: conversion engines, generation orchestrators and the
  rule-engine entry point
- scheduling: end-of-request job queue and job dispatchers
"""
