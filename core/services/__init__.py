"""
core/services/
Camada de serviços do NetDash.

Contém lógica de negócio agnóstica à interface:
- command_runner       : Execução de comandos nativos (stdout em linhas).
- gateway_resolver     : Parsing do gateway padrão.
- neighbor_scanner     : Parsing da tabela ARP / neighbor.
- peripheral_inventory : Parsing do inventário USB.
- snmp_client          : GET SNMPv2c com retries e timeout.
- metrics_service      : Refresh de CPU / memória / interface.
- discovery_service    : Orquestração de um passe de discovery.
- configuration_service: Push de configuração simulado (NETCONF).
"""
