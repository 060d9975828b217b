"""
Integration tests for fixture loading.

These tests drive Loader through the HTTP gateway against an in-memory
cluster, exercise the pytest plugin, and (when a cluster is reachable)
load the sample tree into a real Elasticsearch.
"""
