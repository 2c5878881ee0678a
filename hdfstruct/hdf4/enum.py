from enum import IntEnum


class HDFTagType(IntEnum):
    '''Identifiers of the tags; only a few of them are interpreted by the decoder,
    the others are listed for reference (see "hdf.h" of the HDF4 library).'''
    DFTAG_NULL    = 1    # empty data descriptor
    DFTAG_VERSION = 30   # version of the library that wrote the file
    DFTAG_FID     = 100  # file identifier
    DFTAG_FD      = 101  # file description
    DFTAG_TID     = 102  # tag identifier
    DFTAG_TD      = 103  # tag description
    DFTAG_DIL     = 104  # data identifier label
    DFTAG_DIA     = 105  # data identifier annotation
    DFTAG_NT      = 106  # number type
    DFTAG_MT      = 107  # machine type
    DFTAG_SDG     = 700  # scientific data group
    DFTAG_SDD     = 701  # scientific data dimension
    DFTAG_SD      = 702  # scientific data
    DFTAG_SDS     = 703  # scales
    DFTAG_SDL     = 704  # labels
    DFTAG_SDU     = 705  # units
    DFTAG_SDF     = 706  # formats
    DFTAG_SDM     = 707  # max/min
    DFTAG_SDC     = 708  # coordinate system
    DFTAG_SDT     = 709  # transpose
    DFTAG_NDG     = 720  # numeric data group
    DFTAG_VG      = 1965  # vgroup
    DFTAG_VH      = 1962  # vdata header
    DFTAG_VS      = 1963  # vdata storage
