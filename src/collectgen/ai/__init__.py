"""
collectgen.ai – chat completion client, message building and token budgeting.
"""
