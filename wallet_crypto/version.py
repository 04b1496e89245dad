"""Wallet Crypto Meta information.
   Wallet Crypto protects named wallet secrets under a password using
   interchangeable cipher suites.
"""
__title__ = 'wallet_crypto'
__description__ = (
   'Pluggable cipher suites and an erasable in-memory secret store '
   'for password-protected wallets.'
)
__version__ = '0.3.0'
__copyright__ = 'Copyright (c) 2026 Jesus Lara'
__author__ = 'Jesus Lara'
__author_email__ = 'jesuslarag@gmail.com'
__license__ = 'Apache-2.0'
