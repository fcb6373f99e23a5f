#!/usr/bin/env python3
"""Hot-seat terminal game of Pyramid for two players."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from pyramid_game.actions import PlayerActionService
from pyramid_game.cards import Card, Rank, Suit
from pyramid_game.events import CardRevealed, GameEnded, GameObserver, PairRemoved, Passed, PlayerChanged
from pyramid_game.game import GameService, GameSession
from pyramid_game.rules_schema import DEFAULT_RULES, load_ruleset

SUIT_KEYS = {"c": Suit.CLUBS, "s": Suit.SPADES, "h": Suit.HEARTS, "d": Suit.DIAMONDS}
RANK_KEYS = {str(rank): rank for rank in Rank}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Pyramid with two players at one terminal.")
    parser.add_argument("player1", help="Name of the first player.")
    parser.add_argument("player2", help="Name of the second player.")
    parser.add_argument("--rules", type=Path, default=None, help="JSON rules file.")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed.")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args()


def parse_card(text: str) -> Optional[Card]:
    """Parse cards written as rank then suit letter, e.g. ``10h`` or ``as``."""
    text = text.strip().upper()
    if len(text) < 2:
        return None
    rank = RANK_KEYS.get(text[:-1])
    suit = SUIT_KEYS.get(text[-1].lower())
    if rank is None or suit is None:
        return None
    return Card(suit, rank)


class ConsoleObserver(GameObserver):
    def after_change_player(self, event: PlayerChanged) -> None:
        print(f"-> player {event.current_player} to move")

    def after_pass(self, event: Passed) -> None:
        print(f"{event.player} passes.")

    def after_reveal_card(self, event: CardRevealed) -> None:
        print(f"{event.player} reveals {event.card}.")

    def after_remove_pair(self, event: PairRemoved) -> None:
        if not event.is_valid:
            print("That pair does not match.")

    def after_end_game(self, event: GameEnded) -> None:
        print(f"Game over. Scores {event.scores[0]} : {event.scores[1]}")
        print(f"{event.winner} has won!" if event.winner else "It's a draw.")


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    rules = load_ruleset(args.rules) if args.rules else DEFAULT_RULES
    if args.seed is not None:
        rules = rules.model_copy(update={"seed": args.seed})

    session = GameSession(rules=rules)
    session.events.subscribe(ConsoleObserver())
    game = GameService(session)
    actions = PlayerActionService(session, game)
    game.new_game(args.player1, args.player2)
    play(game, actions)


def play(game: GameService, actions: PlayerActionService, read: Callable[[str], str] = input) -> None:
    state = game.session.require_state()
    while not state.is_finished():
        print()
        print(state.pyramid)
        top = state.reserve_stack.top()
        print(f"Draw: {state.draw_stack.size} cards   Reserve: {top if top else '-'}")
        print(f"{state.player1}   {state.player2}")
        prompt = f"{game.active_player().name} [p]ass, [r]eveal, [q]uit or two cards (e.g. 5h 10s): "
        try:
            command = read(prompt).lower().split()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not command:
            continue
        if command == ["q"]:
            break
        if command == ["p"]:
            actions.pass_turn()
        elif command == ["r"]:
            actions.reveal_card()
        elif len(command) == 2:
            first, second = parse_card(command[0]), parse_card(command[1])
            if first is None or second is None:
                print("Could not read those cards.")
                continue
            actions.remove_pair(first, second)
        else:
            print("Unknown command.")


if __name__ == "__main__":
    main()
