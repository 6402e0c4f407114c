""" Data-access layer """

from ntpclock.dal import settings

__all__ = ['settings']
