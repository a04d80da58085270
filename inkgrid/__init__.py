"""inkgrid -- printable eight-color encoding of binary data.

Encodes an arbitrary byte sequence as a stream of CMY colors, three
bits per module, terminated by a marker that records the number of
padding bits. The stream is laid out in a rectangular grid framed by a
finder border and a timing pattern so that an optical reader can locate
the grid and count its modules.

    bytes -> codec.encode -> colors -> raster.layout -> RasterGrid -> renderer
"""
