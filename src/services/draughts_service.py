"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    LoadPositionRequest,
    LoadPositionResponse,
    MoveRequest,
    UndoRequest,
)
from src.core.exceptions import (
    GameStateError,
    NothingToUndoError,
    NotYourTurnError,
    RepositoryError,
)
from src.core.models import GameModel
from src.core.shared_types import Side, Status
from src.db.repository import GameRepository
from src.draughts.game import Game

logger = logging.getLogger(__name__)


class DraughtsService:
    """Orchestration of layers for a draughts game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game."""

        # Create a new Game (validates the starting position, if any), and convert into GameModel
        game = (
            Game.from_position(request.starting_position, request.variant)
            if request.starting_position
            else Game.new(request.variant)
        )
        created_game_data = self._to_model(
            game,
            players={request.side.value: request.player_name},
            status=Status.WAITING_FOR_PLAYERS,
        )

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info("Created %s game %s for %s", request.variant, game_id, request.player_name)

        return self._create_game_response(game_id, stored_game)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""

        stored_model = self._fetch_game(request.game_id)
        if stored_model.status != Status.WAITING_FOR_PLAYERS:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {stored_model.status}"
            )

        # The joining player takes whichever side is still free
        taken_side = Side(next(iter(stored_model.registered_players)))
        players = dict(stored_model.registered_players)
        players[taken_side.opponent.value] = request.player_name

        # the game may already be decided if it was created from a finished position
        game = self._load_game(stored_model)
        with_player_registered = self._to_model(game, players=players, status=game.status())

        self.repo.update_game(request.game_id, with_player_registered)
        logger.info("%s joined game %s", request.player_name, request.game_id)
        return self._create_game_response(request.game_id, with_player_registered)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Retrieve the set of legal moves (of one piece, if a square is given)."""

        stored_model = self._fetch_game(request.game_id)
        self._assert_in_progress(stored_model)
        player_side = self._assert_your_turn(stored_model, request.player_name)

        game = self._load_game(stored_model)
        moves = (
            game.legal_moves_for(request.square)
            if request.square is not None
            else game.legal_moves()
        )
        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            side=player_side,
            legal_moves=[move.to_notation(game.board) for move in moves],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""

        stored_model = self._fetch_game(request.game_id)
        self._assert_in_progress(stored_model)
        self._assert_your_turn(stored_model, request.player_name)

        game = self._load_game(stored_model)
        game.apply_move(request.move)

        after_move = self._to_model(
            game, players=stored_model.registered_players, status=game.status()
        )
        self.repo.update_game(request.game_id, after_move)
        return self._create_game_response(request.game_id, after_move)

    def undo_move(self, request: UndoRequest) -> GameResponse:
        """Take back the last move. Either registered player may ask, also after the game ended."""

        stored_model = self._fetch_game(request.game_id)
        if stored_model.status == Status.WAITING_FOR_PLAYERS:
            raise GameStateError("Cannot undo a move before the game started.")
        self._get_player_side(stored_model, request.player_name)

        game = self._load_game(stored_model)
        if game.undo() is None:
            raise NothingToUndoError("There is no move to undo.")

        after_undo = self._to_model(
            game, players=stored_model.registered_players, status=game.status()
        )
        self.repo.update_game(request.game_id, after_undo)
        return self._create_game_response(request.game_id, after_undo)

    def load_position(self, request: LoadPositionRequest) -> LoadPositionResponse:
        """
        Replace the position of an existing game.
        ----

        A position that fails validation is reported back (one message per problem) and nothing gets stored.
        """
        stored_model = self._fetch_game(request.game_id)
        game = self._load_game(stored_model)

        validation = game.validate(request.position)
        if not validation.valid:
            logger.warning(
                "Rejected position for game %s: %s", request.game_id, validation.errors
            )
            return LoadPositionResponse(
                game_id=request.game_id, success=False, errors=validation.errors
            )

        game.load(request.position)
        status = (
            Status.WAITING_FOR_PLAYERS
            if stored_model.status == Status.WAITING_FOR_PLAYERS
            else game.status()
        )
        loaded = self._to_model(game, players=stored_model.registered_players, status=status)
        self.repo.update_game(request.game_id, loaded)
        return LoadPositionResponse(
            game_id=request.game_id, success=True, stats=validation.stats
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            variant=model.variant,
            players=model.registered_players,
            position=model.current_position,
            starting_position=model.starting_position,
            move_history=model.moves,
            status=Status(model.status),
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _load_game(self, model: GameModel) -> Game:
        """Rebuild the domain object by replaying the stored moves from the starting position."""
        return Game.replay(model.variant, model.starting_position, model.moves)

    def _to_model(
        self, game: Game, players: dict[str, str], status: Status
    ) -> GameModel:
        return GameModel(
            variant=game.variant.id,
            starting_position=game.starting_position,
            current_position=game.to_position(with_counters=True),
            moves=game.history_notation(),
            registered_players=dict(players),
            status=status.value,
        )

    def _assert_in_progress(self, model: GameModel) -> None:
        if model.status != Status.PLAYING:
            raise GameStateError(f"Game is not in progress. status: {model.status}")

    def _get_player_side(self, model: GameModel, player: str) -> Side:
        for side_name, name in model.registered_players.items():
            if name == player:
                return Side(side_name)
        raise GameStateError(f"Player {player} is not registered for this game.")

    def _assert_your_turn(self, model: GameModel, player: str) -> Side:
        """You must wait for your turn before calculating legal moves / making a move."""
        player_side = self._get_player_side(model, player)
        turn = Side.FIRST if model.current_position.startswith("W") else Side.SECOND
        if player_side != turn:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {model.registered_players[turn.value]} to make a move first."
            )
        return player_side
