""" Connection settings. Every setting has a built-in default, which can be
    overridden by an environment variable, which can in turn be overridden by
    an explicit keyword argument to :func:`get`.

    ===========  ===================  ==========
    setting      environment          default
    ===========  ===================  ==========
    host         TYTABLE_HOST         localhost
    port         TYTABLE_PORT         1978
    timeout      TYTABLE_TIMEOUT      5.0
    transport    TYTABLE_TRANSPORT    zmq
    ===========  ===================  ==========
"""

import os


defaults = dict()
defaults['host'] = 'localhost'
defaults['port'] = 1978
defaults['timeout'] = 5.0
defaults['transport'] = 'zmq'

environment = dict()
environment['host'] = 'TYTABLE_HOST'
environment['port'] = 'TYTABLE_PORT'
environment['timeout'] = 'TYTABLE_TIMEOUT'
environment['transport'] = 'TYTABLE_TRANSPORT'

converters = dict()
converters['host'] = str
converters['port'] = int
converters['timeout'] = float
converters['transport'] = str

transports = set(('zmq',))


def get(**overrides):
    """ Return a dictionary of connection settings, resolving each one from
        *overrides*, the environment, and the defaults, in that order.
    """

    settings = dict()

    for key, value in defaults.items():
        try:
            value = os.environ[environment[key]]
        except KeyError:
            pass

        try:
            value = overrides.pop(key)
        except KeyError:
            pass

        try:
            value = converters[key](value)
        except (TypeError, ValueError):
            raise ValueError('invalid %s setting: %r' % (key, value))

        settings[key] = value

    if overrides:
        unknown = ', '.join(sorted(overrides))
        raise ValueError('unknown connection settings: ' + unknown)

    if settings['transport'] not in transports:
        raise ValueError('unknown transport: %r' % (settings['transport']))

    return settings


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
