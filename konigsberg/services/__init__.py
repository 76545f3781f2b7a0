from konigsberg.services.puzzle_services import PuzzleServices
from konigsberg.services.game_services import GameServices
