#!/usr/bin/env python3
import argparse, sys

from cavewalk.config import GeneratorConfig, WalkerChance, WalkerPolicy, load_config
from cavewalk.errors import InvalidConfig
from cavewalk.log_utils import setup_logging
from cavewalk.mapgen.generator import RandomWalkGenerator
from cavewalk.mapgen.walls import unwalled_floor_cells
from cavewalk.rng import PMRandom
from cavewalk.tiles import CellState
from cavewalk.timing import StepPacing, run_blocking

def build_config(args) -> GeneratorConfig:
    cfg = load_config(args.config) if args.config else GeneratorConfig()
    over = {}
    for name in ("width", "height", "max_walker_count", "fill_percentage", "seed", "max_carve_steps"):
        v = getattr(args, name)
        if v is not None:
            over[name] = v
    if args.policy:
        over["policy"] = WalkerPolicy(args.policy)
    if args.fill_empty:
        over["fill_empty_at_end"] = True
    if any(v is not None for v in (args.redirect, args.duplicate, args.die)):
        c = cfg.chance
        over["chance"] = WalkerChance(
            redirect=c.redirect if args.redirect is None else args.redirect,
            duplicate=c.duplicate if args.duplicate is None else args.duplicate,
            die=c.die if args.die is None else args.die,
        )
    return cfg.with_overrides(**over).validate()

def make_generator(cfg: GeneratorConfig) -> RandomWalkGenerator:
    return RandomWalkGenerator(cfg, PMRandom.from_seed(cfg.seed or 0))

def cmd_show(args):
    cfg = build_config(args)
    if args.animate:
        cfg = cfg.with_overrides(
            floor_pacing=StepPacing("seconds", seconds=args.animate),
            wall_pacing=StepPacing("seconds", seconds=args.animate),
        )
    gen = make_generator(cfg)
    if args.animate:
        def frame(_pause):
            sys.stdout.write("\033[H\033[2J" + gen.grid.to_ascii() + "\n")
            sys.stdout.flush()
        run_blocking(gen.start(), on_pause=frame)
    else:
        gen.generate()
    print(gen.grid.to_ascii())

def cmd_stats(args):
    cfg = build_config(args)
    gen = make_generator(cfg)
    grid = gen.generate()
    s = gen.stats
    print(f"size        {grid.width}x{grid.height}")
    print(f"policy      {cfg.policy.value}")
    print(f"seed        {cfg.seed or 0}")
    print(f"floors      {grid.count(CellState.FLOOR)}")
    print(f"walls       {grid.count(CellState.WALL)}")
    print(f"empty       {grid.count(CellState.EMPTY)}")
    print(f"filled      {grid.filled_fraction():.3f} (target {cfg.fill_percentage:.3f})")
    print(f"carve steps {s.carve_steps}")
    print(f"walkers     {len(gen.pool)}")
    print(f"pauses      {s.pauses}")
    print(f"unwalled    {len(unwalled_floor_cells(grid))}")

def add_common(p):
    p.add_argument('--config', type=str, help='JSON config file')
    p.add_argument('--width', type=int)
    p.add_argument('--height', type=int)
    p.add_argument('--max-walkers', dest='max_walker_count', type=int)
    p.add_argument('--fill', dest='fill_percentage', type=float)
    p.add_argument('--redirect', type=float)
    p.add_argument('--duplicate', type=float)
    p.add_argument('--die', type=float)
    p.add_argument('--policy', choices=[v.value for v in WalkerPolicy])
    p.add_argument('--fill-empty', action='store_true')
    p.add_argument('--seed', type=int)
    p.add_argument('--max-steps', dest='max_carve_steps', type=int)
    p.add_argument('--log-level', default='WARNING')

def main(argv=None):
    p = argparse.ArgumentParser(description="Random-walk cave generator")
    sub = p.add_subparsers(dest='cmd', required=True)
    p1 = sub.add_parser('show', help='print the generated map')
    add_common(p1)
    p1.add_argument('--animate', type=float, default=0.0, metavar='SECONDS',
                    help='redraw after every step, pausing this long')
    p1.set_defaults(func=cmd_show)
    p2 = sub.add_parser('stats', help='print map statistics')
    add_common(p2)
    p2.set_defaults(func=cmd_stats)
    args = p.parse_args(argv)
    setup_logging(args.log_level, color=sys.stderr.isatty())
    try:
        args.func(args)
    except InvalidConfig as e:
        p.error(str(e))

if __name__ == '__main__':
    main()
