from abc import ABC, abstractmethod


class Drawable(ABC):
    ''' Anything that can hand a renderer a flat, draw-ready vertex stream.

    The renderer owns buffers, shaders and batching; a Drawable only
    produces data.
    '''

    @abstractmethod
    def vertex_stream(self):
        ''' Returns an (N, 8) float array of x y z nx ny nz u v rows,
        three rows per triangle, in world space. '''
        pass
