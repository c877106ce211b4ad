#!/usr/bin/env python3
# Animated viewer for the random-walk generator.
# - R: restart with the next seed (the running generation is cancelled)
# - P: toggle walker policy (per-walker combined <-> staged passes) and restart
# - E: toggle the final empty fill and restart
# - Esc: quit
# - 60 Hz fixed loop; pacing comes from --floor-ticks/--wall-ticks or --step-seconds

import argparse
import pygame

from cavewalk.config import GeneratorConfig, WalkerChance, WalkerPolicy, load_config
from cavewalk.log_utils import setup_logging
from cavewalk.mapgen.generator import RandomWalkGenerator
from cavewalk.render.tileset import SurfaceSink, Tileset
from cavewalk.rng import PMRandom
from cavewalk.timing import StepPacing, FrameStepper

FPS = 60

def pacing_from_args(args, ticks: int) -> StepPacing:
    if args.step_seconds > 0:
        return StepPacing("seconds", seconds=args.step_seconds)
    return StepPacing("ticks", ticks=ticks)

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", type=str, default=None, help="JSON config file")
    ap.add_argument("--width", type=int, default=60)
    ap.add_argument("--height", type=int, default=40)
    ap.add_argument("--fill", type=float, default=0.4)
    ap.add_argument("--max-walkers", type=int, default=10)
    ap.add_argument("--redirect", type=float, default=0.5)
    ap.add_argument("--duplicate", type=float, default=0.05)
    ap.add_argument("--die", type=float, default=0.05)
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--tile", type=int, default=12, help="Tile size in pixels")
    ap.add_argument("--floor-ticks", type=int, default=1)
    ap.add_argument("--wall-ticks", type=int, default=0)
    ap.add_argument("--step-seconds", type=float, default=0.0)
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args()

    setup_logging(args.log_level)

    if args.config:
        cfg = load_config(args.config)
    else:
        cfg = GeneratorConfig(
            width=args.width, height=args.height,
            max_walker_count=args.max_walkers, fill_percentage=args.fill,
            chance=WalkerChance(args.redirect, args.duplicate, args.die),
            floor_pacing=pacing_from_args(args, args.floor_ticks),
            wall_pacing=pacing_from_args(args, args.wall_ticks),
            seed=args.seed,
        )

    pygame.init()
    clock = pygame.time.Clock()
    W, H = cfg.width * args.tile, cfg.height * args.tile
    screen = pygame.display.set_mode((W, H))
    canvas = pygame.Surface((W, H))

    tiles = Tileset(args.tile)
    sink = SurfaceSink(canvas, tiles, cfg.height)
    seed = cfg.seed or 0

    def restart(gen=None):
        # Reusing the generator makes start() cancel the run in progress.
        if gen is None:
            gen = RandomWalkGenerator(cfg.with_overrides(seed=seed), PMRandom.from_seed(seed), sink)
        else:
            gen.rng = PMRandom.from_seed(seed)
        return gen, FrameStepper(gen.start())

    gen, stepper = restart()
    running = True
    while running:
        dt = clock.tick(FPS) / 1000.0
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.key == pygame.K_r:
                    seed += 1
                    gen, stepper = restart(gen)
                elif ev.key == pygame.K_p:
                    nxt = (WalkerPolicy.STAGED_PASSES
                           if cfg.policy is WalkerPolicy.PER_WALKER_COMBINED
                           else WalkerPolicy.PER_WALKER_COMBINED)
                    cfg = cfg.with_overrides(policy=nxt)
                    stepper.steps.close()
                    gen, stepper = restart()
                elif ev.key == pygame.K_e:
                    cfg = cfg.with_overrides(fill_empty_at_end=not cfg.fill_empty_at_end)
                    stepper.steps.close()
                    gen, stepper = restart()

        stepper.update(dt)

        screen.blit(canvas, (0, 0))
        pygame.display.set_caption(
            f"cavewalk | seed {seed}  {cfg.policy.value}  [{gen.phase}]  "
            f"walkers:{len(gen.pool)}  filled:{gen.grid.filled_fraction():.2f}"
        )
        pygame.display.flip()

    pygame.quit()

if __name__ == "__main__":
    main()
