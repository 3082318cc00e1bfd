"""
Checkpoint storage backends (MongoDB, JSON file).
"""
