"""Protocol constants.

Keep these in one place to avoid stringly-typed request handling.
"""

NULL = b'\x00'

# Commands understood by a table server.

PUT = 'put'
PUTKEEP = 'putkeep'
PUTCAT = 'putcat'
OUT = 'out'
GET = 'get'
MGET = 'mget'
VSIZ = 'vsiz'
ITERINIT = 'iterinit'
ITERNEXT = 'iternext'
FWMKEYS = 'fwmkeys'
ADDINT = 'addint'
ADDDOUBLE = 'adddouble'
SYNC = 'sync'
OPTIMIZE = 'optimize'
VANISH = 'vanish'
COPY = 'copy'
RESTORE = 'restore'
SETMST = 'setmst'
RNUM = 'rnum'
SIZE = 'size'
STAT = 'stat'
SETINDEX = 'setindex'
GENUID = 'genuid'
SEARCH = 'search'

# Search directives and trailing search modes.

ADDCOND = b'addcond'
SETORDER = b'setorder'
SETLIMIT = b'setlimit'

MODE_COUNT = b'count'
MODE_OUT = b'out'

# Condition codes. Code 6 (string equal to one of a list) exists on the
# server side but has no name in the builder.

QCSTREQ = 0
QCSTRINC = 1
QCSTRBW = 2
QCSTREW = 3
QCSTRAND = 4
QCSTROR = 5
QCSTROREQ = 6
QCSTRRX = 7
QCNUMEQ = 8
QCNUMGT = 9
QCNUMGE = 10
QCNUMLT = 11
QCNUMLE = 12
QCNUMBT = 13
QCNUMOREQ = 14

QCNEGATE = 1 << 24
QCNOIDX = 1 << 25

# Result ordering.

QOSTRASC = 0
QOSTRDESC = 1
QONUMASC = 2
QONUMDESC = 3

# Index types for setindex.

ITLEXICAL = b'0'
ITDECIMAL = b'1'
ITOPT = b'9998'
ITVOID = b'9999'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
