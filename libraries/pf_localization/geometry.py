# geometry and frame transforms

import numpy as np


def wrap_angle(angle):
    # wrap to -pi, pi
    return (angle + np.pi) % (2 * np.pi) - np.pi


def rotation_matrix(theta):
    c = np.cos(theta)
    s = np.sin(theta)
    return np.array([[c, -s], [s,  c]])


def transform_to_map(obs_xy, pose_x, pose_y, pose_theta):
    # local (agent) frame points -> map frame, rotation then translation
    obs_xy = np.asarray(obs_xy, dtype=np.float64).reshape(-1, 2)

    R = rotation_matrix(pose_theta)
    points = obs_xy @ R.T
    points[:, 0] += pose_x
    points[:, 1] += pose_y

    return points


def angle_difference(angle1, angle2):
    return wrap_angle(angle1 - angle2)
