from enum import Flag


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE    = 0
    MAGIC   = 1 << 0  # signature mismatch raises
    TAG     = 1 << 1  # recognized tag failing to unpack raises
    UNKNOWN = 1 << 2  # unrecognized tag raises
    RANGE   = 1 << 3  # payload outside the file becomes Invalid instead of empty
    INHERIT = 1 << 4
