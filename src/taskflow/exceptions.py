# SPDX-License-Identifier: MIT


class TaskflowError(Exception):
    """Base class for errors raised by taskflow."""


class PersistenceError(TaskflowError):
    """
    The storage collaborator failed to load or save the collection.

    A failed save is raised after the in-memory mutation has already been
    applied; the in-memory collection stays authoritative and is not rolled
    back. A failed load leaves the store without a collection.
    """


class ConfigurationError(TaskflowError):
    """The configuration file could not be read or holds an invalid value."""
