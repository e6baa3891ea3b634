from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    registry = current_app.extensions['room_registry']
    return jsonify({'message': 'Welcome to the tetris room server!', 'games': len(registry)})
