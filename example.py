#!/usr/bin/env python3
"""
Example usage of the lifeboard package.
"""

from lifeboard import Board, BorderOpt, GameOfLife, PatternLibrary


def main():
    """Demonstrate programmatic usage of the lifeboard package."""
    # A looping board lets the glider travel forever
    board = Board(12, 12, BorderOpt.LOOP)
    game = GameOfLife(board)

    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    if glider:
        glider.apply_to_board(board, offset_x=4, offset_y=4)

        print("Initial state:")
        print(board)
        print(f"Population: {game.population}")
        print()

        for i in range(10):
            game.step()
            print(f"Generation {game.generation}:")
            print(board)
            print(f"Population: {game.population}")

            if game.cycle_detected:
                print(f"Cycle detected! Length: {game.cycle_length}")
                break

            print()

    # Boards round-trip through the text format
    print("Snapshot:")
    print(board.to_text())

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
