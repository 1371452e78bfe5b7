"""
Services Module

Mutation handlers that orchestrate the stores under the ownership and
uniqueness rules:
- accounts: register / login / delete account
- profiles: required + optional info, learning languages, travel plans
- posts: posts, likes and comments
"""
