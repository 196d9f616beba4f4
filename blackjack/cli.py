"""Interactive console shell around the blackjack engine."""

import argparse
import logging
import sys
import time
from decimal import Decimal, InvalidOperation

from config import GameConfig, config
from blackjack.errors import BlackjackError, ShoeEmpty
from blackjack.game import BlackjackGame, EventType, GameEvent, Round

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(level=level, format=config.logging.format)


def _buy_in(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise argparse.ArgumentTypeError(f"amount must be a finite number: {value!r}")
    return amount


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    defaults = config.game
    parser = argparse.ArgumentParser(prog="blackjack", description="BlackJack card game")
    parser.add_argument(
        "-d", "--deck-count", type=int, default=defaults.deck_count,
        help="The number of decks in the shoe",
    )
    parser.add_argument(
        "-r", "--reshuffle-limit", type=int, default=defaults.reshuffle_limit,
        help="The minimum number of cards required to play another round",
    )
    parser.add_argument(
        "--delay", type=int, default=defaults.delay_ms,
        help="Delay (in milliseconds) between moves, 0 means no delay",
    )
    parser.add_argument(
        "-b", "--buy-in-amount", type=_buy_in, default=defaults.buy_in_amount,
        help="The initial amount of money for the player in dollars ($)",
    )
    parser.add_argument(
        "--log-level", default=config.logging.level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser.parse_args(argv)


class ConsoleRenderer:
    """Prints engine events as they happen, pausing between dealer moves."""

    def __init__(self, game: BlackjackGame, delay_seconds: float) -> None:
        self.game = game
        self.delay_seconds = delay_seconds
        game.subscribe(self.on_round_started, EventType.ROUND_STARTED)
        game.subscribe(self.on_player_blackjack, EventType.PLAYER_BLACKJACK)
        game.subscribe(self.on_dealer_reveals, EventType.DEALER_REVEALS)
        game.subscribe(self.on_dealer_hits, EventType.DEALER_HITS)
        game.subscribe(self.on_round_ended, EventType.ROUND_ENDED)
        game.subscribe(self.on_insufficient_funds, EventType.INSUFFICIENT_FUNDS)
        game.subscribe(self.on_shoe_shuffled, EventType.SHOE_SHUFFLED)

    def pause(self) -> None:
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)

    @property
    def _round(self) -> Round:
        if self.game.current_round is None:
            raise RuntimeError("No round in progress")
        return self.game.current_round

    def on_round_started(self, event: GameEvent) -> None:
        print(f"Dealer: {event.data['dealer']}")
        self.pause()

    def on_player_blackjack(self, event: GameEvent) -> None:
        print("BlackJack!")

    def on_dealer_reveals(self, event: GameEvent) -> None:
        print(f"Hand: {self._round.player_hand}")
        print(f"Dealer hand: {self._round.dealer_hand}")

    def on_dealer_hits(self, event: GameEvent) -> None:
        self.pause()
        print(f"Dealer hit {self._round.dealer_hand}")

    def on_round_ended(self, event: GameEvent) -> None:
        self.pause()
        print(event.data["outcome"].describe())

    def on_insufficient_funds(self, event: GameEvent) -> None:
        print(
            f"You cannot afford a bet of {event.data['required']}$, "
            "please try again with a smaller bet"
        )

    def on_shoe_shuffled(self, event: GameEvent) -> None:
        print(f"Shoe over, reshuffling {event.data['remaining']} cards")


def get_bet_amount(game: BlackjackGame) -> int | None:
    """Ask for a bet until a usable answer is given; None means quit."""
    player = game.player
    while True:
        print("Place your bets for the round!")
        choice = input("Repeat last [r] / Amount [a] / Quit [q]? ").strip().lower()

        if choice == "q":
            return None
        if choice == "r":
            if player.last_bet == 0:
                print("You have not yet placed any bets, please place one before trying to repeat")
                continue
            return player.last_bet
        if choice == "a":
            amount = input(f"How much would you like to bet of your {player.bankroll}$? ").strip()
            try:
                return int(amount)
            except ValueError:
                print(f"Invalid number {amount}, please try again")
                continue
        print("Invalid choice, please try again")


def play_round(game: BlackjackGame, bet: int) -> bool:
    """Play one round with the given bet. Returns False if the bet was refused."""
    round_ = game.start_round(bet)
    if round_ is None:
        return False

    try:
        while round_.awaiting_decision:
            print(f"Hand: {round_.player_hand}")
            choice = input("Move? [h/s] ")
            if not round_.decide(choice):
                print(f"Invalid choice '{choice.strip()}', please try again")
    except ShoeEmpty:
        game.abort_round()
        raise

    game.settle(round_)
    return True


def play_shoe(game: BlackjackGame, renderer: ConsoleRenderer) -> None:
    """Play rounds until the player quits or runs out of money."""
    while not game.player.is_broke:
        print("============ ROUND BEGIN ============")
        bet = get_bet_amount(game)
        if bet is None:
            break
        if not play_round(game, bet):
            continue

        renderer.pause()
        print("============ ROUND END   ============ \n")
        print(f"Bankroll: {game.player.bankroll}$")
        print(f"Counts (running/true) {game.running_count}/{game.true_count:.1f}\n")

        if game.needs_reshuffle:
            game.reshuffle()
    else:
        print("You are out of money, thanks for playing!")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        game_config = GameConfig(
            deck_count=args.deck_count,
            reshuffle_limit=args.reshuffle_limit,
            delay_ms=args.delay,
            buy_in_amount=args.buy_in_amount,
        )
    except BlackjackError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    game = BlackjackGame(game_config)
    renderer = ConsoleRenderer(game, game_config.delay_seconds)
    logger.info("Starting game with %d decks", game_config.deck_count)

    try:
        play_shoe(game, renderer)
    except (EOFError, KeyboardInterrupt):
        print()
    except ShoeEmpty as e:
        logger.error("Shoe ran out mid-round: %s", e)
        print("The shoe ran out of cards, raise the reshuffle limit", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
