import logging
import random

from flask import (Blueprint, abort, current_app, jsonify, redirect,
                   render_template, request, url_for)

from backend.engine.gamegenerator import LevelGenerator
from backend.engine.gamesolver import SearchStats, Solver
from backend.models.codec import state_from_data, state_from_text, state_to_text
from backend.models.color import swatch
from backend.models.errors import CodecError, NoSolutionError, PuzzleValidationError

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__)


def _rng():
    seed = current_app.config.get('WATERSORT_SEED')
    return random.Random(seed)


def _state_url(state):
    return url_for('main.show_state', state=state_to_text(state))


@main_bp.app_context_processor
def _template_helpers():
    return {'swatch': swatch}


@main_bp.route('/')
def index():
    return redirect(url_for('main.generate'))


@main_bp.route('/gen')
def generate():
    """Redirect to a freshly generated random level."""
    state = LevelGenerator.generate(
        current_app.config['WATERSORT_COLORS'],
        current_app.config['WATERSORT_BOTTLE_SIZE'],
        _rng(),
    )
    return redirect(_state_url(state))


@main_bp.route('/state')
def show_state():
    """Render a level together with the next pour of a shortest solution."""
    param = request.args.get('state', '')
    if not param:
        abort(400, description="the required 'state' parameter is missing")

    try:
        state = state_from_text(param)
    except (CodecError, PuzzleValidationError) as err:
        abort(400, description=f"failed to parse the 'state' parameter: {err}")

    solved = state.is_solved()
    step = None
    next_url = None
    if not solved:
        try:
            step = Solver.hint(state)
        except NoSolutionError as err:
            abort(422, description=str(err))
        following = state.copy()
        following.apply(step)
        next_url = _state_url(following)

    return render_template(
        'state_show.html',
        state=state,
        step=step,
        next_url=next_url,
        solved=solved,
    )


@main_bp.route('/api/solve', methods=['POST'])
def api_solve():
    """Solve a JSON level and return the full list of pours."""
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({'error': 'expected a JSON body'}), 400

    try:
        state = state_from_data(data)
    except (CodecError, PuzzleValidationError) as err:
        return jsonify({'error': str(err)}), 400

    stats = SearchStats()
    try:
        steps = Solver.solve(state, stats=stats)
    except NoSolutionError as err:
        return jsonify({'error': str(err), 'complexity': err.explored}), 422

    return jsonify({
        'steps': [
            {'from': s.src, 'to': s.dst, 'color': s.color.label} for s in steps
        ],
        'complexity': stats.explored,
    })


@main_bp.app_errorhandler(500)
def internal_error(err):
    logger.exception("%s: %s", request.full_path, getattr(err, 'original_exception', err))
    return "Internal server error", 500
