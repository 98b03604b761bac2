from flask import Blueprint, request, jsonify, send_file
from ngo_dashboard import db
from ngo_dashboard.models.campaign import Campaign
from ngo_dashboard.models.financial_record import ProjectFinancialRecord, CampaignFinancialRecord, RecordType
from ngo_dashboard.models.project import Project
from ngo_dashboard.utils import db_utils
from ngo_dashboard.utils.aggregation import financial_totals, monthly_financial_rollup, transaction_feed
from ngo_dashboard.utils.validators import json_object, missing_fields, parse_amount, parse_date, parse_enum, parse_id
from datetime import datetime
from openpyxl.styles import Font, Alignment
import openpyxl
import csv
import io
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('finance', __name__)

RECENT_TRANSACTIONS = 10

EXPORT_HEADERS = ['Date', 'Type', 'Amount', 'Description', 'Source', 'Source Type', 'Source ID']

# -----------------------------------------------------------------------------
# Finance Overview
# -----------------------------------------------------------------------------

@bp.route('', methods=['GET'])
def get_finance_overview():
    """Get totals, the 12-month rollup and the unified transaction list"""
    try:
        project_records = db_utils.get_project_financial_records(db.session)
        campaign_records = db_utils.get_campaign_financial_records(db.session)
        all_records = project_records + campaign_records

        totals = financial_totals(all_records)
        transactions = transaction_feed(project_records, campaign_records)

        return jsonify({
            **totals,
            'monthlyData': monthly_financial_rollup(all_records, datetime.utcnow()),
            'recentTransactions': transactions[:RECENT_TRANSACTIONS],
            'allTransactions': transactions
        })
    except Exception as e:
        logger.error(f"Error fetching finance data: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch finance data'}), 500

@bp.route('', methods=['POST'])
def create_financial_record():
    """Create a financial record attached to a project or a campaign"""
    try:
        data = json_object(request.get_json(silent=True))

        source_type = data.get('sourceType')
        if source_type not in ('project', 'campaign'):
            return jsonify({'error': 'Invalid source type. Must be "campaign" or "project".'}), 400

        missing = missing_fields(data, ['sourceId', 'type', 'amount'])
        if missing:
            return jsonify({'error': f'Missing required field: {missing[0]}'}), 400

        source_id = parse_id(data['sourceId'], 'sourceId')
        fields = {
            'type': parse_enum(RecordType, data['type'], 'record type'),
            'amount': parse_amount(data['amount']),
            'description': data.get('description'),
            'date': parse_date(data['date']) if data.get('date') else datetime.utcnow()
        }

        if source_type == 'campaign':
            if not db.session.get(Campaign, source_id):
                return jsonify({'error': 'Campaign not found'}), 400
            record = CampaignFinancialRecord(campaign_id=source_id, **fields)
        else:
            if not db.session.get(Project, source_id):
                return jsonify({'error': 'Project not found'}), 400
            record = ProjectFinancialRecord(project_id=source_id, **fields)

        db.session.add(record)
        db.session.commit()

        logger.info(f"Created {source_type} financial record {record.id}")
        return jsonify({'record': record.to_dict()}), 201

    except ValueError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating financial record: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to create financial record'}), 500

# -----------------------------------------------------------------------------
# Transaction Export
# -----------------------------------------------------------------------------

@bp.route('/export', methods=['GET'])
def export_transactions():
    """Download every transaction as CSV or an Excel workbook"""
    try:
        export_format = request.args.get('format', 'csv')
        if export_format not in ('csv', 'excel'):
            return jsonify({'error': 'Invalid format. Must be one of: csv, excel'}), 400

        transactions = transaction_feed(
            db_utils.get_project_financial_records(db.session),
            db_utils.get_campaign_financial_records(db.session)
        )
        filename_base = f"transactions_{datetime.utcnow().strftime('%Y%m%d')}"

        if export_format == 'csv':
            output = generate_csv_export(transactions)
            mime_type = 'text/csv'
            extension = 'csv'
        else:
            output = generate_excel_export(transactions)
            mime_type = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
            extension = 'xlsx'

        return send_file(
            output,
            mimetype=mime_type,
            as_attachment=True,
            download_name=f"{filename_base}.{extension}"
        )
    except Exception as e:
        logger.error(f"Error exporting transactions: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to export transactions'}), 500

def _export_row(transaction):
    return [
        transaction['date'],
        transaction['type'],
        transaction['amount'],
        transaction['description'] or '',
        transaction['source'],
        transaction['sourceType'],
        transaction['sourceId']
    ]

def generate_csv_export(transactions):
    """Render transactions as a CSV file object"""
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(EXPORT_HEADERS)
    for transaction in transactions:
        writer.writerow(_export_row(transaction))

    return io.BytesIO(output.getvalue().encode('utf-8'))

def generate_excel_export(transactions):
    """Render transactions as an Excel workbook file object"""
    workbook = openpyxl.Workbook()
    worksheet = workbook.active
    worksheet.title = "Transactions"

    # Write headers
    for col, header in enumerate(EXPORT_HEADERS, 1):
        cell = worksheet.cell(row=1, column=col, value=header)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal='center')

    # Write data
    for row, transaction in enumerate(transactions, 2):
        for col, value in enumerate(_export_row(transaction), 1):
            worksheet.cell(row=row, column=col, value=value)

    output = io.BytesIO()
    workbook.save(output)
    output.seek(0)
    return output
