## per-timestep driving loop: init from gps, then predict -> weight -> resample

import numpy as np

from .data_format import (
    compute_error_metrics,
    load_control_data,
    load_gt_data,
    load_observation_sequence,
)
from .map_loader import load_map
from .particle_filter import ParticleFilter


def load_experiment_data(config):
    data = config['data']
    landmark_map = load_map(data['map_file'])
    controls = load_control_data(data['control_file'])
    ground_truth = load_gt_data(data['gt_file'])

    if len(controls) != len(ground_truth):
        raise ValueError(f"{len(controls)} control steps but {len(ground_truth)} ground truth poses")

    observations = load_observation_sequence(data['observation_dir'], len(ground_truth))

    return {
        'map': landmark_map,
        'controls': controls,
        'ground_truth': ground_truth,
        'observations': observations
    }


def run_filter(config, data=None, pf=None, on_step=None):
    '''
    Run the filter over a whole recorded sequence.

    data defaults to load_experiment_data(config). on_step, if given, is
    called as on_step(step, pf, best_particle, error) after each weighting.
    '''
    if data is None:
        data = load_experiment_data(config)
    if pf is None:
        pf = ParticleFilter.from_config(config)

    sensors = config['sensors']
    sigma_gps = sensors['gps']['sigma']
    sigma_pos = sensors['odometry']['sigma_pos']
    delta_t = sensors['odometry']['delta_t']
    sigma_landmark = sensors['landmark']['sigma']
    sensor_range = (config.get('filter') or {}).get('sensor_range', 50.0)

    landmark_map = data['map']
    controls = data['controls']
    ground_truth = data['ground_truth']
    if len(ground_truth) == 0:
        raise ValueError("no timesteps to run")

    estimates = []
    mean_estimates = []
    associations = []

    for t in range(len(ground_truth)):
        if t == 0:
            ## gps stand-in: ground truth pose with gps uncertainty
            gx, gy, gtheta = ground_truth[0]
            pf.init(gx, gy, gtheta, sigma_gps)
        else:
            # control applied over the previous interval
            velocity, yaw_rate = controls[t - 1]
            pf.prediction(delta_t, sigma_pos, velocity, yaw_rate)

        obs = data['observations'][t]
        pf.update_weights(sensor_range, sigma_landmark, obs, landmark_map)

        best = pf.best_particle()
        ids, sense_x, sense_y = pf.associate(best, obs, landmark_map, sensor_range)
        pf.set_associations(best, ids, sense_x, sense_y)

        estimates.append(best.pose)
        mean_estimates.append(pf.mean_pose())
        associations.append(pf.get_associations(best))

        if on_step is not None:
            err = compute_error_metrics([best.pose], [ground_truth[t]])['abs_errors'][0]
            on_step(t, pf, best, err)

        pf.resample()

    estimates = np.array(estimates)
    metrics = compute_error_metrics(estimates, ground_truth)

    return {
        'estimates': estimates,
        'ground_truth': ground_truth,
        'mean_estimates': np.array(mean_estimates),
        'errors': metrics['abs_errors'],
        'metrics': metrics,
        'associations': associations
    }
