"""Keychain Transform Meta information.
   Keychain Transform keeps secret fields of persisted state inside the OS keychain.
"""
__title__ = 'keychain_transform'
__description__ = (
   'Keychain Transform moves secret fields of a persisted state '
   'object into the operating system keychain.'
)
__version__ = '0.3.0'
__copyright__ = 'Copyright (c) 2023 Jesus Lara'
__author__ = 'Jesus Lara'
__author_email__ = 'jesuslarag@gmail.com'
__license__ = 'Apache-2.0'
__url__ = 'https://github.com/phenobarbital/keychain-transform'
