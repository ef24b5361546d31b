"""Leave Management package.

Organized by feature modules (users, requests, reports) on top of a
whole-table persistence store, with a thin Flask JSON layer and plain
service/repository classes underneath.
"""
