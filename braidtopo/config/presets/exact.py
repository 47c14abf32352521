"""Exact preset: Python integers, no overflow possible."""

backend = "bigint"
iterations = 30
strict = True
