#!/usr/bin/env python3
"""
Example Reactor Simulation

This script runs the reference operator scenario against a fresh
reactor: rods withdrawn to 50% at timestep 3, coolant reduced to 80% at
timestep 6, stopping early if the safety system trips.

Usage:
    python run_simulation.py [--timesteps N] [--delay SECONDS]

Example:
    python run_simulation.py --timesteps 10 --delay 1.0
"""

import argparse
import logging
import sys
import os

# Add parent directory to path for importing reactor_sim
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reactor_sim.reactor import create_reactor
from reactor_sim.simulation import DEFAULT_COMMANDS, OperatorCommand, run_simulation
from reactor_sim.utils import format_status


def print_status(timestep, status):
    """Print one status report."""
    print()
    print(format_status(timestep, status))


def print_summary(result, reactor):
    """Print end-of-run summary."""
    print("\n" + "=" * 50)
    print("       RUN SUMMARY")
    print("=" * 50)

    if result.completed:
        print("  Outcome:       completed without trip")
    elif result.already_shutdown:
        print("  Outcome:       reactor already shut down before the run")
    else:
        print(f"  Outcome:       emergency shutdown at timestep {result.shutdown_step}")
        reasons = ", ".join(t.value for t in reactor.trip_conditions)
        print(f"  Trip causes:   {reasons}")

    for name, value in result.peak_values().items():
        print(f"  Peak {name:<14} {value:>10.2f}")

    print("\n  SAFETY MARGINS")
    print("  " + "-" * 40)
    for name, margin in reactor.safety_margins().items():
        print(f"    {name:<24} {margin:>10.2f}")


def parse_command(text):
    """Parse STEP:ROD[:FLOW] into an OperatorCommand."""
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(
            f"Command must be STEP:RODS[:FLOW], got {text!r}"
        )
    try:
        step = int(parts[0])
        rods = float(parts[1]) if parts[1] else None
        flow = float(parts[2]) if len(parts) == 3 and parts[2] else None
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid command {text!r}")
    return OperatorCommand(timestep=step, control_rods=rods, coolant_flow=flow)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Reactor Core Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Reference scenario, 10 timesteps
  %(prog)s --delay 1.0              # Pace steps one second apart
  %(prog)s --command 2:30 --command 4::50
        """
    )

    parser.add_argument(
        "--timesteps",
        type=int,
        default=10,
        help="Number of timesteps to run (default: 10)"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="Wall-clock delay between timesteps in seconds (default: 0)"
    )
    parser.add_argument(
        "--command",
        type=parse_command,
        action="append",
        help="Operator command STEP:RODS[:FLOW]; replaces the reference scenario"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.timesteps < 0 or args.delay < 0:
        print("Error: timesteps and delay must be non-negative")
        sys.exit(1)

    print("Reactor Simulation Started")

    reactor = create_reactor()
    try:
        result = run_simulation(
            reactor,
            timesteps=args.timesteps,
            commands=args.command or DEFAULT_COMMANDS,
            on_step=print_status,
            step_delay=args.delay,
        )
    except Exception as e:
        print(f"\nError during simulation: {e}")
        raise

    print_summary(result, reactor)


if __name__ == "__main__":
    main()
