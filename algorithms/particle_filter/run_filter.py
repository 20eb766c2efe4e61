## run the landmark particle filter over a recorded drive
## usage: python run_filter.py [config.yaml]

import os
import sys
import time

from pf_localization import load_config, run_filter, save_estimates
from pf_localization.config_loader import get_output_paths, print_config_summary

DEFAULT_CONFIG = os.path.join(os.path.dirname(__file__), '..', '..', 'config', 'default.yaml')
REPORT_EVERY = 50  # steps between progress lines


def print_step(t, pf, best, err):
    if t % REPORT_EVERY == 0:
        print(f"t={t}: err x={err[0]:.3f} y={err[1]:.3f} yaw={err[2]:.3f}, "
              f"n_eff={pf.effective_sample_size():.1f}, assoc=[{pf.get_associations(best)}]")


def main(config_path):
    config = load_config(config_path)

    print("="*60)
    print("PARTICLE FILTER - LANDMARK LOCALIZATION")
    print("="*60)
    print_config_summary(config)
    print("="*60)

    start_time = time.time()
    results = run_filter(config, on_step=print_step)
    run_time = time.time() - start_time

    paths = get_output_paths(config, 'particle_filter')
    save_estimates(paths['estimate_file'], results['estimates'], results['ground_truth'],
                   results['associations'])

    ## analysis
    metrics = results['metrics']
    mean_abs = results['errors'].mean(axis=0)
    std_abs = results['errors'].std(axis=0)

    print(f"\nSteps: {len(results['estimates'])}, runtime {run_time:.2f}s")
    print(f"Mean abs error x={mean_abs[0]:.3f} y={mean_abs[1]:.3f} yaw={mean_abs[2]:.3f}")
    print(f"Std abs error x={std_abs[0]:.3f} y={std_abs[1]:.3f} yaw={std_abs[2]:.3f}")
    print(f"Position MAE: {metrics['mae']:.3f}m")
    print(f"Position RMSE: {metrics['rmse']:.3f}m")
    print(f"Position std: {metrics['std']:.3f}m")
    print(f"Max error: {metrics['max_error']:.3f}m")
    print(f"Saved estimates to {paths['estimate_file']}")

    return results


if __name__ == '__main__':
    main(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG)
