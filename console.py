import logging
import sys

from gomoku.app.enums import Difficulty
from gomoku.app.game import Game
from gomoku.core.errors import GomokuError
from gomoku.core.types import Player

def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    difficulty = sys.argv[1] if len(sys.argv) > 1 else Difficulty.MEDIUM

    print("=======================================")
    print(f"   GOMOKU: Human vs Engine ({difficulty})")
    print("=======================================")
    print("Enter moves as 'x y'. 'u' undoes your last move, 'q' quits.")

    try:
        game = Game(difficulty=difficulty)
    except ValueError as e:
        print(e)
        return

    print(game.get_visual_board())

    while not game.is_over():

        # --- Human Turn (Black) ---
        if game.current_player == Player.BLACK:
            user_input = input("\nYour Move (x y): ").strip().lower()
            if user_input == "q":
                break
            if user_input == "u":
                # Undo the engine's reply and the human move before it
                game.undo()
                game.undo()
                print("\n" + game.get_visual_board())
                continue
            try:
                x, y = (int(v) for v in user_input.replace(",", " ").split())
                game.play(x, y)
            except ValueError:
                print("Please enter two numbers.")
                continue
            except GomokuError as e:
                print(f"Refused: {e}")
                continue

        # --- Engine Turn (White) ---
        else:
            print("\nEngine is thinking...")
            evaluation = game.play_engine()
            if evaluation.best_move is None:
                print("Engine has no move.")
                break
            print(f"Engine plays {evaluation.best_move.coordinates} (score {evaluation.score})")

        # Show Board
        print("\n" + game.get_visual_board())

    # --- End Game ---
    if game.winner is not None:
        winner_name = "Human" if game.winner == Player.BLACK else "Engine"
        print(f"\nGame Over! Winner: {winner_name}")
    elif game.is_draw():
        print("\nGame Over! It's a Draw.")

if __name__ == "__main__":
    main()
