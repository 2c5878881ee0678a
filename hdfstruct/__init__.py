"""
# hdfstruct: HDF4 files for humans.

We can define a file format as a way of describing a binary representation of something
digital, where each subcomponent of the file format aims to represent a specific aspect
of the digital artefact.

Here a format is declared as a Chunk, i.e. a class whose attributes are the fields
composing it, in the order they appear in the file; unpack() reads a stream and fills
the fields with the values found there.

The format implemented is the legacy Hierarchical Data Format version 4 (see hdfstruct.hdf4):

    from hdfstruct.hdf4 import parse, tags

    hdf = parse('/path/to/file.hdf')
    hdf.remove_nulls()

    for descriptor in hdf.get_tags(tags.ScientificDataDimension):
        print(descriptor.reference, descriptor.tag.shape)

Packing data back into a file is not supported.
"""
