#!/usr/bin/env python3
"""
Demo: Running a Siteswap

Drives the scheduler through a few seconds of a pattern and renders:

1. A single frame (hands and balls)
2. The path of every ball across the recording
3. The number of balls in the air over time

Usage: python demo/demo_cascade.py [siteswap]

Output: output/demo_cascade/
"""

import logging
import os
import sys

import matplotlib.pyplot as plt

from jugglesim.analysis import airborne_counts, frame_times
from jugglesim.core import create_scheduler
from jugglesim.core.trajectory import sample_flight
from jugglesim.viz import plot_ball_tracks, plot_frame, save_figure


def main(siteswap: str = "531"):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    print("=" * 60)
    print(f"  SITESWAP {siteswap}")
    print("=" * 60)

    out_dir = "output/demo_cascade"
    os.makedirs(out_dir, exist_ok=True)

    print("\n1. Parsing pattern...")
    scheduler = create_scheduler(siteswap, bpm=180)
    print(f"   Balls: {scheduler.num_balls}, period: {scheduler.pattern.period}, "
          f"sync: {scheduler.is_sync}")
    print(f"   Beat: {scheduler.beat_duration:.0f} ms, dwell: {scheduler.config.dwell_time:.0f} ms")

    print("\n2. Recording 4 seconds at 60 fps...")
    frames = scheduler.record(240)
    print(f"   Throws made: {scheduler.throw_count}")
    for record in scheduler.history:
        print(f"   t={record.time:7.1f}ms  {record.hand_name} throws {record.value} (ball {record.ball_id})")

    print("\n3. Rendering...")
    fig, ax = plot_frame(frames[-1], scheduler.layout, title=f"{siteswap} at t={frames[-1].time:.0f}ms")
    for ball in scheduler.airborne():
        xs, ys = sample_flight(ball.state.trajectory)
        ax.plot(xs, ys, linestyle="--", color=ball.color, alpha=0.5)
    save_figure(fig, f"{out_dir}/frame.png")
    plt.close(fig)

    fig = plot_ball_tracks(frames, scheduler.layout, title=f"{siteswap}: ball paths")
    save_figure(fig, f"{out_dir}/tracks.png")
    plt.close(fig)

    fig, ax = plt.subplots(figsize=(10, 3))
    ax.step(frame_times(frames), airborne_counts(frames), where="post", color="#007acc")
    ax.set_xlabel("time (ms)")
    ax.set_ylabel("balls in the air")
    ax.set_ylim(0, scheduler.num_balls + 0.5)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    save_figure(fig, f"{out_dir}/airborne.png")
    plt.close(fig)
    print(f"   Saved: {out_dir}/frame.png, tracks.png, airborne.png")

    print("\n" + "=" * 60)
    print("  Done")
    print("=" * 60)


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "531")
