from gateway_service.main import run

run()
