## data I/O - load control / ground truth / observation text files and save results

import numpy as np
import csv
import os

from .geometry import angle_difference


def _load_table(path, n_cols):
    ## whitespace separated numbers, one record per line
    with open(path, 'r') as f:
        lines = [line for line in f if line.strip()]
    if not lines:
        return np.zeros((0, n_cols))

    table = np.loadtxt(lines, dtype=np.float64, ndmin=2)
    if table.shape[1] != n_cols:
        raise ValueError(f"{path}: expected {n_cols} columns, got {table.shape[1]}")
    return table


def load_control_data(path):
    ## one "velocity yaw_rate" pair per timestep
    return _load_table(path, 2)


def load_gt_data(path):
    ## ground truth pose "x y theta" per timestep
    return _load_table(path, 3)


def load_observations(path):
    ## agent-frame "x y" detections for one timestep
    return _load_table(path, 2)


def observation_path(observation_dir, step):
    # files are numbered from 1
    return os.path.join(observation_dir, f"observations_{step + 1:06d}.txt")


def load_observation_sequence(observation_dir, n_steps):
    return [load_observations(observation_path(observation_dir, t)) for t in range(n_steps)]


def save_estimates(csv_path, estimates, ground_truth, associations=None):
    ## save filter results to csv
    with open(csv_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['step', 'estimated_x', 'estimated_y', 'estimated_theta',
                         'gt_x', 'gt_y', 'gt_theta', 'associations'])

        for t, (est, gt) in enumerate(zip(estimates, ground_truth)):
            assoc = associations[t] if associations is not None else ''
            writer.writerow([t, f"{est[0]:.6f}", f"{est[1]:.6f}", f"{est[2]:.6f}",
                             f"{gt[0]:.6f}", f"{gt[1]:.6f}", f"{gt[2]:.6f}", assoc])


def compute_error_metrics(estimates, ground_truth):
    ## per step |dx|, |dy|, |dyaw| plus position mae, rmse, std
    estimates = np.asarray(estimates, dtype=np.float64).reshape(-1, 3)
    ground_truth = np.asarray(ground_truth, dtype=np.float64).reshape(-1, 3)

    abs_err = np.abs(estimates - ground_truth)
    abs_err[:, 2] = np.abs(angle_difference(estimates[:, 2], ground_truth[:, 2]))

    pos_err = np.sqrt(abs_err[:, 0]**2 + abs_err[:, 1]**2)

    return {
        'abs_errors': abs_err,
        'mae': np.mean(pos_err),
        'rmse': np.sqrt(np.mean(pos_err**2)),
        'std': np.std(pos_err),
        'max_error': np.max(pos_err),
        'position_errors': pos_err
    }
