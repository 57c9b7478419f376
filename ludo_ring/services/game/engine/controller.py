"""Turn controller - the stateful rules engine a UI drives.

The controller owns one GameState and mutates it only through its commands:

    controller = GameController(dice=Dice(seed))
    controller.roll_dice()
    controller.select_piece((0, 0))
    if controller.move_selected_piece():
        controller.check_and_remove_opponent_piece()
        controller.end_turn()

Commands report rule and phase violations by returning False and leaving the
state untouched (the reason is kept in ``last_rejection``). Broken invariants
are programmer errors and raise GameInvariantError.
"""

import logging

from ludo_ring.schemas.game_engine import (
    NUM_PLAYERS,
    STANDARD_BOARD,
    BoardSetup,
    Finished,
    GameState,
    OnFinalPath,
    OnRing,
    Piece,
    PieceRef,
    PieceState,
    Player,
    TurnPhase,
    new_game_state,
)

from .captures import detect_captures, send_home
from .dice import Dice, DiceSource
from .events import (
    AnyGameEvent,
    DiceRolled,
    GameWon,
    PieceCaptured,
    PieceDeselected,
    PieceEnteredFinalPath,
    PieceEnteredRing,
    PieceFinished,
    PieceMoved,
    PieceSelected,
    TurnEnded,
)
from .legal_moves import get_legal_pieces
from .movement import compute_destination
from .validation import (
    ErrorCode,
    ValidationResult,
    validate_end_turn,
    validate_move,
    validate_pass,
    validate_roll,
    validate_select,
)

logger = logging.getLogger(__name__)


class GameInvariantError(RuntimeError):
    """The game state is corrupt. Never recoverable."""


PieceLike = PieceRef | Piece | tuple[int, int]


def to_piece_ref(piece: PieceLike) -> PieceRef:
    if isinstance(piece, PieceRef):
        return piece
    if isinstance(piece, Piece):
        return piece.ref
    player, index = piece
    return PieceRef(player=player, piece=index)


class GameController:
    """Drives one four-player game.

    Args:
        dice: Dice source; defaults to fair dice seeded from the OS.
        board: Board geometry.
        state: Existing state to resume from; defaults to a fresh game.
    """

    def __init__(
        self,
        dice: DiceSource | None = None,
        board: BoardSetup = STANDARD_BOARD,
        state: GameState | None = None,
    ):
        self.board = board
        self.dice: DiceSource = dice if dice is not None else Dice()
        self.state = state if state is not None else new_game_state(board)
        self.event_log: list[AnyGameEvent] = []
        self.last_rejection: ValidationResult | None = None
        self._announced_winner: int | None = self.winner()
        self._check_invariants()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def players(self) -> list[Player]:
        return self.state.players

    @property
    def current_player(self) -> int:
        return self.state.current_player

    @property
    def current_player_name(self) -> str:
        return self.state.players[self.state.current_player].name

    @property
    def current_player_color(self) -> str:
        return self.state.players[self.state.current_player].color

    @property
    def dice1(self) -> int | None:
        return self.state.dice1

    @property
    def dice2(self) -> int | None:
        return self.state.dice2

    @property
    def steps(self) -> int:
        return self.state.steps

    @property
    def has_rolled(self) -> bool:
        return self.state.has_rolled

    @property
    def has_moved(self) -> bool:
        return self.state.has_moved

    @property
    def has_bonus_roll(self) -> bool:
        return self.state.bonus_roll

    @property
    def selected_piece(self) -> Piece | None:
        if self.state.selected is None:
            return None
        return self.state.piece(self.state.selected)

    @property
    def phase(self) -> TurnPhase:
        if not self.state.has_rolled:
            return TurnPhase.AWAITING_ROLL
        if not self.state.has_moved:
            return TurnPhase.AWAITING_MOVE
        return TurnPhase.AWAITING_END_TURN

    def get_piece(self, player: int, piece: int) -> Piece:
        return self.state.piece(PieceRef(player=player, piece=piece))

    def legal_pieces(self) -> list[PieceRef]:
        return get_legal_pieces(self.state, self.board)

    def winner(self) -> int | None:
        """Index of the first player with all four pieces finished, or None."""
        for player in self.state.players:
            if all(piece.state == PieceState.FINISHED for piece in player.pieces):
                return player.index
        return None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def roll_dice(self) -> bool:
        """Roll both dice. Only allowed once per roll phase."""
        validation = validate_roll(self.state)
        if not validation.is_valid:
            return self._reject("roll", validation)

        dice1, dice2 = self.dice.roll()
        state = self.state
        state.dice1 = dice1
        state.dice2 = dice2
        state.has_rolled = True
        state.has_moved = False
        state.bonus_roll = dice1 == dice2
        self.last_rejection = None

        logger.info(
            "Dice rolled: player=%d, dice=(%d, %d), bonus=%s",
            state.current_player,
            dice1,
            dice2,
            state.bonus_roll,
        )
        self._emit(
            DiceRolled(
                player_index=state.current_player,
                dice1=dice1,
                dice2=dice2,
                bonus_roll=state.bonus_roll,
            )
        )
        self._check_invariants()
        return True

    def select_piece(self, piece: PieceLike) -> bool:
        """Select one of the current player's pieces, replacing any previous selection.

        Pieces of other players and selections before rolling are ignored.
        """
        ref = to_piece_ref(piece)
        validation = validate_select(self.state, ref)
        if not validation.is_valid:
            return self._reject("select", validation)

        self.state.selected = ref
        self.last_rejection = None
        logger.debug("Piece selected: %d/%d", ref.player, ref.piece)
        self._emit(PieceSelected(piece=ref))
        self._check_invariants()
        return True

    def deselect_piece(self) -> None:
        ref = self.state.selected
        self.state.selected = None
        self.last_rejection = None
        if ref is not None:
            logger.debug("Piece deselected: %d/%d", ref.player, ref.piece)
            self._emit(PieceDeselected(piece=ref))

    def move_selected_piece(self) -> bool:
        """Move the selected piece by the rolled dice.

        Returns:
            True if the move was legal and applied. False otherwise, with the
            state unchanged so another piece can be chosen.
        """
        validation = validate_move(self.state)
        if not validation.is_valid:
            return self._reject("move", validation)

        state = self.state
        ref = state.selected
        piece = state.piece(ref)
        destination = compute_destination(piece, state.dice1, state.dice2, self.board)
        if destination is None:
            return self._reject(
                "move",
                ValidationResult.error(
                    ErrorCode.ILLEGAL_MOVE,
                    f"Piece {ref.player}/{ref.piece} cannot move {state.steps} from {piece.state.value}",
                ),
            )

        from_state = piece.state
        from_position = piece.position
        piece.placement = destination
        state.has_moved = True
        self.last_rejection = None

        logger.info(
            "Piece moved: piece=%d/%d, %s(%s) -> %s(%s), dice=(%d, %d)",
            ref.player,
            ref.piece,
            from_state.value,
            from_position,
            piece.state.value,
            piece.position,
            state.dice1,
            state.dice2,
        )

        if from_state == PieceState.HOME:
            self._emit(PieceEnteredRing(piece=ref, ring_index=destination.ring_index))
        else:
            self._emit(
                PieceMoved(
                    piece=ref,
                    from_state=from_state,
                    to_state=piece.state,
                    from_position=from_position,
                    to_position=piece.position,
                    steps=state.steps,
                )
            )
            if from_state == PieceState.ACTIVE and isinstance(destination, OnFinalPath):
                self._emit(PieceEnteredFinalPath(piece=ref, stretch_index=destination.stretch_index))

        if isinstance(destination, Finished):
            self._emit(PieceFinished(piece=ref))
            self._announce_winner()

        self._check_invariants()
        return True

    def check_and_remove_opponent_piece(self) -> list[Piece]:
        """Send opponents sharing the selected piece's ring cell back home.

        Call right after a successful move; before one it captures nothing.

        Returns:
            The captured pieces.
        """
        ref = self.state.selected
        if ref is None or not self.state.has_moved:
            return []

        mover = self.state.piece(ref)
        victims = detect_captures(self.state, mover)
        for victim in victims:
            send_home(victim)
            self._emit(
                PieceCaptured(
                    capturing_piece=ref,
                    captured_piece=victim.ref,
                    ring_index=mover.placement.ring_index,
                )
            )
        if victims:
            self._check_invariants()
        return victims

    def end_turn(self) -> bool:
        """Finish the turn after a move. A doubles roll keeps the same player."""
        validation = validate_end_turn(self.state)
        if not validation.is_valid:
            return self._reject("end_turn", validation)
        self._hand_off("end_turn")
        return True

    def pass_turn(self) -> bool:
        """Give up the roll when none of the current player's pieces can move.

        Follows the same hand-off as end_turn, so a doubles roll still keeps
        the turn.
        """
        validation = validate_pass(self.state, self.board)
        if not validation.is_valid:
            return self._reject("pass", validation)
        self._hand_off("pass")
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _hand_off(self, reason: str) -> None:
        state = self.state
        player = state.current_player
        bonus = state.bonus_roll
        if not bonus:
            state.current_player = (player + 1) % NUM_PLAYERS
            state.turn_number += 1
        state.dice1 = None
        state.dice2 = None
        state.has_rolled = False
        state.has_moved = False
        state.bonus_roll = False
        state.selected = None
        self.last_rejection = None

        logger.info(
            "Turn ended: player=%d, reason=%s, bonus=%s, next_player=%d",
            player,
            reason,
            bonus,
            state.current_player,
        )
        self._emit(
            TurnEnded(
                player_index=player,
                reason=reason,
                bonus_roll=bonus,
                next_player=state.current_player,
            )
        )
        self._check_invariants()

    def _announce_winner(self) -> None:
        winner = self.winner()
        if winner is not None and self._announced_winner is None:
            self._announced_winner = winner
            logger.info("Winner detected: player=%d", winner)
            self._emit(GameWon(winner=winner))

    def _reject(self, command: str, validation: ValidationResult) -> bool:
        self.last_rejection = validation
        logger.debug(
            "Command rejected: command=%s, player=%d, code=%s, message=%s",
            command,
            self.state.current_player,
            validation.error_code.value,
            validation.error_message,
        )
        return False

    def _emit(self, event: AnyGameEvent) -> None:
        event.seq = self.state.event_seq
        self.state.event_seq += 1
        self.event_log.append(event)

    def _check_invariants(self) -> None:
        state = self.state
        if state.has_moved and not state.has_rolled:
            raise GameInvariantError("has_moved set without has_rolled")
        if state.has_rolled and (state.dice1 is None or state.dice2 is None):
            raise GameInvariantError("has_rolled set without dice values")
        expected_bonus = state.has_rolled and state.dice1 == state.dice2
        if state.bonus_roll != expected_bonus:
            raise GameInvariantError(
                f"bonus_roll={state.bonus_roll} but dice=({state.dice1}, {state.dice2}), "
                f"has_rolled={state.has_rolled}"
            )
        if state.selected is not None and state.selected.player != state.current_player:
            raise GameInvariantError(
                f"Selected piece {state.selected.player}/{state.selected.piece} "
                f"does not belong to player {state.current_player}"
            )
        for player in state.players:
            for index, piece in enumerate(player.pieces):
                if piece.owner != player.index or piece.index != index:
                    raise GameInvariantError(
                        f"Piece {piece.owner}/{piece.index} stored at {player.index}/{index}"
                    )
                if isinstance(piece.placement, OnRing) and not (
                    0 <= piece.placement.ring_index < self.board.ring_size
                ):
                    raise GameInvariantError(f"Ring index out of range: {piece.placement.ring_index}")
