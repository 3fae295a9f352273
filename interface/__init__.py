"""
Interface package: text front end for the infinite chess board.

Modules:
    console — Line protocol over stdin/stdout.
              Can be run as a standalone script: python interface/console.py
"""
