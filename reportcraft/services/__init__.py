"""
Services - usage metering, subscriptions, statistics and storage.
"""
