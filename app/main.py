from server import server

server_app = server.handler
