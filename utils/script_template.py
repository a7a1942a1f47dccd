"""Apps Script source the instructor deploys behind the registration sheet.

doGet returns every row as JSON; doPost appends registrations or, given
{"action": "delete_all"}, clears every row below the header.
"""

SHEET_COLUMNS = [
    'id', 'studentName', 'lineId', 'classId', 'className',
    'classDate', 'isPaid', 'paymentLast5', 'timestamp',
]

APPS_SCRIPT_TEMPLATE = """
// Google Apps Script for yoga class registrations

function doGet(e) {
  var sheet = SpreadsheetApp.getActiveSpreadsheet().getActiveSheet();
  var data = sheet.getDataRange().getValues();
  var headers = data[0];
  var rows = data.slice(1);

  var result = rows.map(function(row) {
    var obj = {};
    headers.forEach(function(header, index) {
      obj[header] = row[index];
    });
    if (obj['isPaid'] === 'TRUE') obj['isPaid'] = true;
    if (obj['isPaid'] === 'FALSE') obj['isPaid'] = false;
    return obj;
  });

  return ContentService.createTextOutput(JSON.stringify(result))
    .setMimeType(ContentService.MimeType.JSON);
}

function doPost(e) {
  try {
    var sheet = SpreadsheetApp.getActiveSpreadsheet().getActiveSheet();
    var payload = JSON.parse(e.postData.contents);

    if (payload.action === 'delete_all') {
      var lastRow = sheet.getLastRow();
      if (lastRow > 1) {
        // Keep the header row
        sheet.deleteRows(2, lastRow - 1);
      }
      return ContentService.createTextOutput(JSON.stringify({status: 'success', message: 'All data cleared'}))
        .setMimeType(ContentService.MimeType.JSON);
    }

    var registrations = Array.isArray(payload) ? payload : [payload];

    if (sheet.getLastRow() === 0) {
      sheet.appendRow(%(columns)s);
    }

    registrations.forEach(function(r) {
      sheet.appendRow([
        r.id,
        r.studentName,
        r.lineId,
        r.classId,
        r.className,
        r.classDate,
        r.isPaid,
        r.paymentLast5 || '',
        new Date(r.timestamp).toISOString()
      ]);
    });

    return ContentService.createTextOutput(JSON.stringify({status: 'success', count: registrations.length}))
      .setMimeType(ContentService.MimeType.JSON);

  } catch (error) {
    return ContentService.createTextOutput(JSON.stringify({status: 'error', message: error.toString()}))
      .setMimeType(ContentService.MimeType.JSON);
  }
}
""" % {'columns': '[' + ', '.join(f"'{c}'" for c in SHEET_COLUMNS) + ']'}
