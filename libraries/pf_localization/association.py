## nearest neighbour data association against the landmark map

import numpy as np
from scipy.spatial.distance import cdist

from .errors import EmptyMapError


def nearest_landmarks(points, landmark_map):
    '''
    Index into landmark_map of the closest landmark for each map-frame point.

    Scans the whole map (squared euclidean distance). argmin keeps the first
    index on ties, so equal distances always resolve to the landmark listed
    first in the map.
    '''
    if len(landmark_map) == 0:
        raise EmptyMapError("landmark map is empty")

    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(points) == 0:
        return np.zeros(0, dtype=np.intp)

    sq_dist = cdist(points, landmark_map.coords, 'sqeuclidean')
    return np.argmin(sq_dist, axis=1)


def find_nearest_landmark(x, y, landmark_map):
    # single point lookup, returns the map's own Landmark record
    idx = nearest_landmarks([[x, y]], landmark_map)[0]
    return landmark_map[idx]
