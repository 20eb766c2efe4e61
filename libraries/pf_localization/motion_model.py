## velocity motion model (bicycle / unicycle, closed form)

import numpy as np

# below this |yaw_rate| the motion is treated as a straight line
YAW_RATE_EPSILON = 1e-6


def predict_pose(x, y, theta, delta_t, velocity, yaw_rate, eps=YAW_RATE_EPSILON):
    '''
    Noise-free pose after driving at (velocity, yaw_rate) for delta_t.
    x, y, theta may be scalars or equally shaped arrays (one entry per
    particle); the control is shared, so the branch is picked once.
    '''
    if abs(yaw_rate) < eps:
        ## straight line, v/yaw_rate would blow up
        x_new = x + velocity * delta_t * np.cos(theta)
        y_new = y + velocity * delta_t * np.sin(theta)
    else:
        theta_end = theta + yaw_rate * delta_t
        vw_ratio = velocity / yaw_rate
        x_new = x + vw_ratio * (np.sin(theta_end) - np.sin(theta))
        y_new = y + vw_ratio * (np.cos(theta) - np.cos(theta_end))

    theta_new = theta + yaw_rate * delta_t

    return x_new, y_new, theta_new


def sample_motion_model(poses, delta_t, velocity, yaw_rate, noise, eps=YAW_RATE_EPSILON):
    '''
    Propagate an (N, 3) array of poses one control step and add independent
    zero-mean gaussian noise (an (N, 3) array, one row per pose).
    '''
    poses = np.asarray(poses, dtype=np.float64)
    x_new, y_new, theta_new = predict_pose(poses[:, 0], poses[:, 1], poses[:, 2],
                                           delta_t, velocity, yaw_rate, eps)

    return np.column_stack([x_new, y_new, theta_new]) + noise
