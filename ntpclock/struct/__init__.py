""" Data structures """

from ntpclock.struct import timestamp, exchange, settings

__all__ = ['timestamp', 'exchange', 'settings']
